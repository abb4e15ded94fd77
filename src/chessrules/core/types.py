"""Square type alias and coordinate helpers.

Squares are ``(file, rank)`` pairs, both 0–7:
    A1=(0, 0), B1=(1, 0), ..., H1=(7, 0)
    ...
    A8=(0, 7), ..., H8=(7, 7)

The canonical text form is an uppercase file letter followed by the rank
digit, e.g. ``"E4"``.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (file, rank)

BOARD_SIZE = 8
FILE_LETTERS = "ABCDEFGH"


def in_bounds(file: int, rank: int) -> bool:
    """Whether (file, rank) lies on the board."""
    return 0 <= file < BOARD_SIZE and 0 <= rank < BOARD_SIZE


def square_name(file: int, rank: int) -> str:
    """Text form, e.g. (4, 3) → 'E4'."""
    return f"{FILE_LETTERS[file]}{rank + 1}"


def parse_square(name: object) -> Square | None:
    """Parse square text, e.g. 'E4' → (4, 3).

    Returns ``None`` for anything that is not a letter A–H followed by a
    rank digit 1–8.
    """
    if not isinstance(name, str) or len(name) != 2:
        return None
    letter, digit = name
    if letter not in FILE_LETTERS or digit not in "12345678":
        return None
    return FILE_LETTERS.index(letter), int(digit) - 1


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (square_name(f, 0) for f in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (square_name(f, 1) for f in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (square_name(f, 2) for f in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (square_name(f, 3) for f in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (square_name(f, 4) for f in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (square_name(f, 5) for f in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (square_name(f, 6) for f in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (square_name(f, 7) for f in range(8))
