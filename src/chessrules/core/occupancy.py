"""Occupancy - snapshot of piece placement on an 8x8 board."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import BOARD_SIZE, FILE_LETTERS, Square, parse_square

_LOGGER = logging.getLogger(__name__)


class Occupancy:
    """Mutable 8x8 grid mapping each square to at most one piece.

    Indexed by ``(file, rank)``. An occupancy is a snapshot rebuilt from the
    live piece set before every rules query; it never owns the pieces.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        # [file][rank] -> piece reference or None.
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Builder ------------------------------------------------------------

    @classmethod
    def from_pieces(cls, pieces: Iterable[Piece]) -> Occupancy:
        """Build a snapshot from the caller's live piece set.

        Pieces with malformed square text are skipped. Two distinct pieces on
        one square indicate a placement bug upstream; it is logged and the
        later piece wins.
        """
        occ = cls()
        for piece in pieces:
            sq = parse_square(piece.square)
            if sq is None:
                _LOGGER.warning(
                    "Skipping %r: malformed square %r", piece, piece.square
                )
                continue
            current = occ[sq]
            if current is not None and current is not piece:
                _LOGGER.error(
                    "Two pieces claim square %s: %r and %r",
                    piece.square,
                    current,
                    piece,
                )
            occ[sq] = piece
        return occ

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        file, rank = sq
        return self._grid[file][rank]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        file, rank = sq
        self._grid[file][rank] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def at(self, name: str) -> Piece | None:
        """Piece on the square named *name*, ``None`` if empty or malformed."""
        sq = parse_square(name)
        return None if sq is None else self[sq]

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All (square, piece) pairs, file-major from A1."""
        for file, column in enumerate(self._grid):
            for rank, piece in enumerate(column):
                if piece is not None:
                    yield (file, rank), piece

    def pieces(self, color: Color) -> list[Piece]:
        """All pieces of *color*, in square order."""
        return [piece for _, piece in self.occupied() if piece.color == color]

    def find_king(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if no such king is present."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    @property
    def has_both_kings(self) -> bool:
        return (
            self.find_king(Color.WHITE) is not None
            and self.find_king(Color.BLACK) is not None
        )

    def __len__(self) -> int:
        return sum(1 for _ in self.occupied())

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Occupancy:
        """Shallow copy: a new grid holding the same piece references."""
        occ = Occupancy()
        occ._grid = [column.copy() for column in self._grid]
        return occ

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Occupancy):
            return NotImplemented
        return all(
            a is b
            for mine, theirs in zip(self._grid, other._grid)
            for a, b in zip(mine, theirs)
        )

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  " + " ".join(FILE_LETTERS))
        return "\n".join(rows)
