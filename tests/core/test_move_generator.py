"""Tests for pseudo-legal move generation."""

from chessrules.core.enums import Color, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece


def _targets(moves: list[Move]) -> set[str]:
    return {m.to_sq for m in moves}


def _lone(char: str, square: str) -> list[Move]:
    piece = Piece.from_char(char, square)
    occ = Occupancy.from_pieces([piece])
    return MoveGenerator(occ).generate_pseudo_legal_moves(piece)


# ── Empty-board mobility ─────────────────────────────────────────────────────


class TestEmptyBoard:
    def test_knight_corner(self) -> None:
        assert _targets(_lone("N", "A1")) == {"B3", "C2"}

    def test_king_corner(self) -> None:
        assert _targets(_lone("K", "A1")) == {"A2", "B1", "B2"}

    def test_knight_center(self) -> None:
        assert len(_lone("N", "D4")) == 8

    def test_rook_d4(self) -> None:
        assert len(_lone("R", "D4")) == 14

    def test_bishop_d4(self) -> None:
        assert len(_lone("B", "D4")) == 13

    def test_queen_d4(self) -> None:
        assert len(_lone("Q", "D4")) == 27

    def test_no_captures_on_empty_board(self) -> None:
        assert not any(m.is_capture for m in _lone("Q", "D4"))


class TestMalformedSquare:
    def test_piece_with_bad_square_has_no_moves(self) -> None:
        piece = Piece(Color.WHITE, PieceType.QUEEN, "D0")
        assert MoveGenerator(Occupancy()).generate_pseudo_legal_moves(piece) == []


# ── Blocking and captures ───────────────────────────────────────────────────


class TestSliders:
    def test_own_piece_blocks_without_move(self, make_position) -> None:
        occ, pieces = make_position("Rd4", "Pd6")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["D4"])
        targets = _targets(moves)
        assert "D5" in targets
        assert "D6" not in targets
        assert "D7" not in targets

    def test_enemy_piece_is_captured_and_stops_ray(self, make_position) -> None:
        occ, pieces = make_position("Rd4", "pd6")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["D4"])
        captures = [m for m in moves if m.is_capture]
        assert [m.to_sq for m in captures] == ["D6"]
        assert "D7" not in _targets(moves)

    def test_bishop_blocked_diagonal(self, make_position) -> None:
        occ, pieces = make_position("Bc1", "Pd2", "pb2")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["C1"])
        assert _targets(moves) == {"B2"}


class TestSteppers:
    def test_knight_skips_own_and_captures_enemy(self, make_position) -> None:
        occ, pieces = make_position("Nb1", "Pd2", "pc3")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["B1"])
        assert _targets(moves) == {"A3", "C3"}
        assert [m.is_capture for m in moves if m.to_sq == "C3"] == [True]

    def test_king_captures(self, make_position) -> None:
        occ, pieces = make_position("Ke4", "pe5", "Pd5")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E4"])
        targets = _targets(moves)
        assert "E5" in targets
        assert "D5" not in targets
        assert len(moves) == 7


# ── Pawns ────────────────────────────────────────────────────────────────────


class TestPawnPushes:
    def test_start_rank_single_and_double(self) -> None:
        assert _targets(_lone("P", "E2")) == {"E3", "E4"}

    def test_black_pawn_moves_down(self) -> None:
        assert _targets(_lone("p", "E7")) == {"E6", "E5"}

    def test_no_double_step_off_start_rank(self) -> None:
        assert _targets(_lone("P", "E3")) == {"E4"}

    def test_blocked_single_blocks_double(self, make_position) -> None:
        occ, pieces = make_position("Pe2", "ne3")
        assert MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E2"]) == []

    def test_blocked_double(self, make_position) -> None:
        occ, pieces = make_position("Pe2", "ne4")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E2"])
        assert _targets(moves) == {"E3"}

    def test_pawn_cannot_capture_forward(self, make_position) -> None:
        occ, pieces = make_position("Pe4", "pe5")
        assert MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E4"]) == []


class TestPawnCaptures:
    def test_diagonal_captures(self, make_position) -> None:
        occ, pieces = make_position("Pe4", "pd5", "Pf5")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E4"])
        captures = {m.to_sq for m in moves if m.is_capture}
        assert captures == {"D5"}

    def test_edge_file(self, make_position) -> None:
        occ, pieces = make_position("Pa4", "pb5")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["A4"])
        assert _targets(moves) == {"A5", "B5"}


class TestPromotion:
    def test_white_push_and_captures_promote_to_queen(self, make_position) -> None:
        occ, pieces = make_position("Pb7", "ra8", "nc8")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["B7"])
        assert _targets(moves) == {"A8", "B8", "C8"}
        assert all(m.is_promotion for m in moves)
        assert all(m.promotion == PieceType.QUEEN for m in moves)

    def test_black_promotes_on_first_rank(self) -> None:
        moves = _lone("p", "G2")
        assert len(moves) == 1
        assert moves[0].to_sq == "G1"
        assert moves[0].is_promotion

    def test_non_final_rank_does_not_promote(self) -> None:
        assert not any(m.is_promotion for m in _lone("P", "B6"))


class TestEnPassant:
    def test_offered_after_double_step(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "pd5")
        last = Move.normal("D7", "D5")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["E5"])
        ep = [m for m in moves if m.is_en_passant]
        assert len(ep) == 1
        assert ep[0].to_sq == "D6"
        assert ep[0].captured_square == "D5"
        assert ep[0].is_capture

    def test_black_en_passant(self, make_position) -> None:
        occ, pieces = make_position("pd4", "Pe4")
        last = Move.normal("E2", "E4")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["D4"])
        ep = [m for m in moves if m.is_en_passant]
        assert [(m.to_sq, m.captured_square) for m in ep] == [("E3", "E4")]

    def test_not_offered_without_last_move(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "pd5")
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(pieces["E5"])
        assert not any(m.is_en_passant for m in moves)

    def test_not_offered_after_single_step(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "pd5")
        last = Move.normal("D6", "D5")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["E5"])
        assert not any(m.is_en_passant for m in moves)

    def test_not_offered_for_non_adjacent_pawn(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "pc5")
        last = Move.normal("C7", "C5")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["E5"])
        assert not any(m.is_en_passant for m in moves)

    def test_not_offered_when_last_mover_is_not_a_pawn(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "rd5")
        last = Move.normal("D7", "D5")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["E5"])
        assert not any(m.is_en_passant for m in moves)

    def test_not_offered_when_target_occupied(self, make_position) -> None:
        occ, pieces = make_position("Pe5", "pd5", "nd6")
        last = Move.normal("D7", "D5")
        moves = MoveGenerator(occ, last).generate_pseudo_legal_moves(pieces["E5"])
        assert not any(m.is_en_passant for m in moves)


# ── Castling candidates ─────────────────────────────────────────────────────


class TestCastlingCandidates:
    def _castles(self, occ: Occupancy, king: Piece) -> list[Move]:
        moves = MoveGenerator(occ).generate_pseudo_legal_moves(king)
        return [m for m in moves if m.is_castle]

    def test_both_sides(self, make_position) -> None:
        occ, pieces = make_position("Ke1", "Ra1", "Rh1")
        castles = self._castles(occ, pieces["E1"])
        kingside = [m for m in castles if m.is_castle_kingside]
        queenside = [m for m in castles if m.is_castle_queenside]
        assert [m.to_sq for m in kingside] == ["G1"]
        assert [m.to_sq for m in queenside] == ["C1"]

    def test_black_castles_on_eighth_rank(self, make_position) -> None:
        occ, pieces = make_position("ke8", "rh8")
        castles = self._castles(occ, pieces["E8"])
        assert [(m.from_sq, m.to_sq) for m in castles] == [("E8", "G8")]

    def test_king_moved(self, make_position) -> None:
        occ, pieces = make_position("Ke1", "Ra1", "Rh1")
        pieces["E1"].has_moved = True
        assert self._castles(occ, pieces["E1"]) == []

    def test_rook_moved(self, make_position) -> None:
        occ, pieces = make_position("Ke1", "Ra1", "Rh1")
        pieces["H1"].has_moved = True
        castles = self._castles(occ, pieces["E1"])
        assert [m.to_sq for m in castles] == ["C1"]

    def test_piece_between_blocks(self, make_position) -> None:
        occ, pieces = make_position("Ke1", "Ra1", "Rh1", "Nb1", "bg1")
        assert self._castles(occ, pieces["E1"]) == []

    def test_enemy_rook_on_home_square(self, make_position) -> None:
        occ, pieces = make_position("Ke1", "rh1")
        assert self._castles(occ, pieces["E1"]) == []

    def test_king_off_home_square(self, make_position) -> None:
        occ, pieces = make_position("Kd1", "Ra1", "Rh1")
        assert self._castles(occ, pieces["D1"]) == []
