"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import PieceType

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Squares are kept in their text form (``"E2"``). For en passant the
    captured pawn does not stand on ``to_sq``; ``captured_square`` names it.
    Promotion always substitutes a Queen.
    """

    from_sq: str
    to_sq: str
    is_capture: bool = False
    is_en_passant: bool = False
    captured_square: str | None = None
    is_castle_kingside: bool = False
    is_castle_queenside: bool = False
    is_promotion: bool = False
    promotion: PieceType = PieceType.QUEEN

    @classmethod
    def normal(cls, from_sq: str, to_sq: str, capture: bool = False) -> Move:
        """Plain move or capture with every special flag cleared."""
        return cls(from_sq, to_sq, is_capture=capture)

    @property
    def is_castle(self) -> bool:
        return self.is_castle_kingside or self.is_castle_queenside

    @property
    def capture_square(self) -> str:
        """Square whose occupant this move removes, if any."""
        if self.is_en_passant and self.captured_square is not None:
            return self.captured_square
        return self.to_sq

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{self.from_sq}{self.to_sq}"
        if self.is_promotion:
            base += _PROMO_CHARS[self.promotion]
        return base
