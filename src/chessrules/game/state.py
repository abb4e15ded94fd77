"""Game state machine: owns the live piece set, turn order and move history."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chessrules.core.enums import Color, GameResult, GameStatus
from chessrules.core.move import Move
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece, standard_pieces
from chessrules.core.rules import Rules
from chessrules.game.executor import MoveExecutor
from chessrules.game.interfaces import GamePhase, IMoveExecutor

_LOGGER = logging.getLogger(__name__)

WAITING_MESSAGE = "Waiting for pieces..."


class IllegalMoveError(ValueError):
    """Raised when a requested move is not playable in the current state."""


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    mover: Piece
    captured: Piece | None = None
    status_after: GameStatus = GameStatus.ONGOING

    @property
    def was_capture(self) -> bool:
        return self.captured is not None

    @property
    def was_check(self) -> bool:
        return self.status_after in (GameStatus.CHECK, GameStatus.CHECKMATE)


@dataclass
class GameState:
    """Manages game lifecycle: phase, side to move, result, move history.

    The rules engine only sees snapshots: every query rebuilds an
    :class:`Occupancy` from :attr:`pieces`. This is a pure data/logic
    class with no threading and no UI.
    """

    executor: IMoveExecutor = field(default_factory=MoveExecutor)
    pieces: list[Piece] = field(default_factory=list, init=False)
    phase: GamePhase = field(default=GamePhase.SETUP, init=False)
    side_to_move: Color = field(default=Color.WHITE, init=False)
    last_move: Move | None = field(default=None, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    status_message: str = field(default=WAITING_MESSAGE, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, pieces: Iterable[Piece] | None = None) -> None:
        """Initialise (or reset) the game, by default to the standard layout."""
        self.pieces = standard_pieces() if pieces is None else list(pieces)
        self.side_to_move = Color.WHITE
        self.last_move = None
        self.result = GameResult.IN_PROGRESS
        self.move_history.clear()
        self.phase = GamePhase.SETUP
        self._refresh_phase()

    def add_piece(self, piece: Piece) -> None:
        """Place *piece* while the position is still being set up."""
        if self.phase != GamePhase.SETUP:
            raise ValueError("Pieces can only be placed during setup")
        self.pieces.append(piece)
        self._refresh_phase()

    # ── Queries ──────────────────────────────────────────────────────────

    def occupancy(self) -> Occupancy:
        """Fresh snapshot of the live piece set."""
        return Occupancy.from_pieces(self.pieces)

    def piece_at(self, square: str) -> Piece | None:
        return self.occupancy().at(square)

    def legal_move_map(self, piece: Piece) -> dict[str, Move]:
        """Legal moves of *piece* keyed by destination square.

        Empty outside the play phase or when it is not *piece*'s turn.
        """
        if self.phase != GamePhase.PLAY or piece.color != self.side_to_move:
            return {}
        if not any(p is piece for p in self.pieces):
            return {}
        legal = Rules.legal_moves(piece, self.occupancy(), self.last_move)
        return {move.to_sq: move for move in legal}

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, piece: Piece, to_square: str) -> MoveRecord:
        """Play *piece* to *to_square* and return the history record.

        Raises :class:`IllegalMoveError` if the move is not legal now.
        """
        if self.phase != GamePhase.PLAY:
            raise IllegalMoveError(f"Cannot move in phase {self.phase.name}")
        if piece.color != self.side_to_move:
            raise IllegalMoveError(f"It is {self.side_to_move!s}'s turn")

        move = self.legal_move_map(piece).get(to_square)
        if move is None:
            raise IllegalMoveError(f"Illegal move: {piece.square}{to_square}")

        captured = self.executor.execute(self.pieces, piece, move)
        self.last_move = move
        self.side_to_move = self.side_to_move.opposite
        _LOGGER.debug("Played %s", move)

        status = self._evaluate_end_conditions()
        record = MoveRecord(
            move=move, mover=piece, captured=captured, status_after=status
        )
        self.move_history.append(record)
        return record

    # ── Internal ─────────────────────────────────────────────────────────

    def _refresh_phase(self) -> None:
        if not self.occupancy().has_both_kings:
            self.status_message = WAITING_MESSAGE
            return
        self.phase = GamePhase.PLAY
        _LOGGER.info("Both kings placed; game is in play")
        self._evaluate_end_conditions()

    def _evaluate_end_conditions(self) -> GameStatus:
        side = self.side_to_move
        status = Rules.game_status(side, self.occupancy(), self.last_move)

        if status == GameStatus.SETUP:
            self.phase = GamePhase.SETUP
            self.status_message = WAITING_MESSAGE
        elif status == GameStatus.CHECKMATE:
            self.phase = GamePhase.GAME_OVER
            self.result = (
                GameResult.BLACK_WINS if side == Color.WHITE else GameResult.WHITE_WINS
            )
            self.status_message = f"CHECKMATE! {side.opposite!s} wins."
        elif status == GameStatus.STALEMATE:
            self.phase = GamePhase.GAME_OVER
            self.result = GameResult.DRAW
            self.status_message = "STALEMATE! Draw."
        elif status == GameStatus.CHECK:
            self.status_message = f"{side!s} is in CHECK"
        else:
            self.status_message = "OK"

        if self.phase == GamePhase.GAME_OVER:
            _LOGGER.info("Game over: %s", self.status_message)
        return status
