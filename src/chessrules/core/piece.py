"""Piece reference held by the caller's live piece set."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(eq=False, slots=True)
class Piece:
    """A piece on the board.

    Pieces compare by identity: an occupancy maps squares to piece
    *references*, and two white pawns are never the same piece.
    The rules engine only reads pieces; the game layer mutates them.
    """

    color: Color
    piece_type: PieceType
    square: str
    has_moved: bool = False

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        moved = ", moved" if self.has_moved else ""
        return f"Piece({self}@{self.square}{moved})"

    @classmethod
    def from_char(cls, char: str, square: str, has_moved: bool = False) -> Piece:
        """Create piece from FEN character, e.g. ('N', 'G1') → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype, square, has_moved)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]


def standard_pieces() -> list[Piece]:
    """The 32 pieces of the standard starting position."""
    pieces: list[Piece] = []
    for color, back, front in ((Color.WHITE, "1", "2"), (Color.BLACK, "8", "7")):
        for letter, ptype in zip("ABCDEFGH", _BACK_RANK):
            pieces.append(Piece(color, ptype, letter + back))
        for letter in "ABCDEFGH":
            pieces.append(Piece(color, PieceType.PAWN, letter + front))
    return pieces
