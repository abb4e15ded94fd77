"""Core enumerations for the chess rules domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.capitalize()


class PieceType(IntEnum):
    """The six piece kinds, ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class GameStatus(IntEnum):
    """State of a position from the point of view of the side to move."""

    SETUP = 0  # a king is missing, legality is undefined
    ONGOING = 1
    CHECK = 2
    CHECKMATE = 3
    STALEMATE = 4


class GameResult(IntEnum):
    """Outcome of a game."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
