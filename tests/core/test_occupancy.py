"""Tests for Piece and Occupancy."""

import logging

import pytest

from chessrules.core.enums import Color, PieceType
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece, standard_pieces


class TestPiece:
    def test_from_char(self) -> None:
        piece = Piece.from_char("n", "G8")
        assert piece.color == Color.BLACK
        assert piece.piece_type == PieceType.KNIGHT
        assert piece.square == "G8"
        assert not piece.has_moved

    def test_invalid_char(self) -> None:
        with pytest.raises(ValueError):
            Piece.from_char("x", "A1")

    def test_identity_equality(self) -> None:
        a = Piece(Color.WHITE, PieceType.PAWN, "A2")
        b = Piece(Color.WHITE, PieceType.PAWN, "A2")
        assert a != b
        assert a == a

    def test_str_and_symbol(self) -> None:
        piece = Piece(Color.WHITE, PieceType.KING, "E1")
        assert str(piece) == "K"
        assert piece.symbol == "♔"


class TestStandardPieces:
    def test_count(self) -> None:
        pieces = standard_pieces()
        assert len(pieces) == 32
        assert sum(p.color == Color.WHITE for p in pieces) == 16

    def test_kings(self) -> None:
        occ = Occupancy.from_pieces(standard_pieces())
        assert occ.find_king(Color.WHITE) == (4, 0)
        assert occ.find_king(Color.BLACK) == (4, 7)

    def test_back_ranks(self) -> None:
        occ = Occupancy.from_pieces(standard_pieces())
        expected = "RNBQKBNR"
        for file, char in enumerate(expected):
            white = occ[(file, 0)]
            black = occ[(file, 7)]
            assert white is not None and str(white) == char
            assert black is not None and str(black) == char.lower()

    def test_empty_middle(self) -> None:
        occ = Occupancy.from_pieces(standard_pieces())
        for file in range(8):
            for rank in range(2, 6):
                assert occ.is_empty((file, rank))


class TestOccupancyBuilder:
    def test_places_pieces(self, make_pieces) -> None:
        pieces = make_pieces("Ke1", "ke8", "Pd4")
        occ = Occupancy.from_pieces(pieces)
        assert occ.at("D4") is pieces[2]
        assert len(occ) == 3

    def test_malformed_square_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        bad = Piece(Color.WHITE, PieceType.ROOK, "Z9")
        with caplog.at_level(logging.WARNING):
            occ = Occupancy.from_pieces([bad])
        assert len(occ) == 0
        assert "malformed square" in caplog.text

    def test_ambiguous_square_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        first = Piece(Color.WHITE, PieceType.ROOK, "A1")
        second = Piece(Color.BLACK, PieceType.ROOK, "A1")
        with caplog.at_level(logging.ERROR):
            occ = Occupancy.from_pieces([first, second])
        assert occ.at("A1") is second
        assert "Two pieces claim square A1" in caplog.text

    def test_same_piece_twice_is_not_ambiguous(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK, "A1")
        with caplog.at_level(logging.ERROR):
            Occupancy.from_pieces([rook, rook])
        assert caplog.text == ""


class TestOccupancyQueries:
    def test_missing_king_is_none(self, make_pieces) -> None:
        occ = Occupancy.from_pieces(make_pieces("Ke1"))
        assert occ.find_king(Color.BLACK) is None
        assert not occ.has_both_kings

    def test_both_kings(self, make_pieces) -> None:
        occ = Occupancy.from_pieces(make_pieces("Ke1", "ke8"))
        assert occ.has_both_kings

    def test_pieces_by_color(self, make_pieces) -> None:
        occ = Occupancy.from_pieces(make_pieces("Ke1", "ke8", "Nb1", "pa7"))
        assert [str(p) for p in occ.pieces(Color.WHITE)] == ["N", "K"]
        assert [str(p) for p in occ.pieces(Color.BLACK)] == ["p", "k"]

    def test_at_malformed(self) -> None:
        assert Occupancy().at("Q9") is None

    def test_copy_is_independent(self, make_pieces) -> None:
        occ = Occupancy.from_pieces(make_pieces("Ke1", "ke8"))
        clone = occ.copy()
        assert clone == occ
        clone[(4, 0)] = None
        assert clone != occ
        assert occ.at("E1") is not None

    def test_repr(self, make_pieces) -> None:
        occ = Occupancy.from_pieces(make_pieces("Ke1", "ke8"))
        lines = repr(occ).splitlines()
        assert lines[0] == "8 . . . . k . . ."
        assert lines[7] == "1 . . . . K . . ."
        assert lines[8] == "  A B C D E F G H"
