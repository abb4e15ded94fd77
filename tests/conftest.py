"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece

PieceFactory = Callable[..., list[Piece]]


def _make_pieces(*tokens: str, moved: bool = False) -> list[Piece]:
    """Pieces from tokens like ``"Ke1"``: FEN letter followed by the square."""
    return [
        Piece.from_char(token[0], token[1:].upper(), has_moved=moved)
        for token in tokens
    ]


@pytest.fixture
def make_pieces() -> PieceFactory:
    """Factory building a piece list, e.g. ``make_pieces("Ke1", "ke8")``."""
    return _make_pieces


@pytest.fixture
def make_position() -> Callable[..., tuple[Occupancy, dict[str, Piece]]]:
    """Factory returning an occupancy and its pieces keyed by square."""

    def _factory(*tokens: str) -> tuple[Occupancy, dict[str, Piece]]:
        pieces = _make_pieces(*tokens)
        return Occupancy.from_pieces(pieces), {p.square: p for p in pieces}

    return _factory
