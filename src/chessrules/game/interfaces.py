"""Abstract interfaces for the game layer.

Follows Dependency Inversion: :class:`~chessrules.game.state.GameState`
depends on these ABCs, not on a concrete move executor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.piece import Piece


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    SETUP = auto()  # fewer than both kings placed, legality undefined
    PLAY = auto()
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IMoveExecutor(ABC):
    """Interface for applying a legal move to the live piece set."""

    @abstractmethod
    def execute(self, pieces: list[Piece], piece: Piece, move: Move) -> Piece | None:
        """Carry out *move* for *piece* and return the captured piece, if any.

        The caller is responsible for the legality check.
        """
