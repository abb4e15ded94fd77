"""Pseudo-legal move generation.

Moves produced here follow each piece's movement pattern but may leave the
mover's own king in check; :mod:`chessrules.core.rules` filters them.
"""

from __future__ import annotations

from typing import assert_never

from chessrules.core.enums import Color, PieceType
from chessrules.core.move import Move
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece
from chessrules.core.types import (
    BOARD_SIZE,
    Square,
    in_bounds,
    parse_square,
    square_name,
)

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (2, 1),
    (2, -1),
    (1, -2),
    (-1, -2),
    (-2, -1),
    (-2, 1),
    (-1, 2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS

# Back-rank geometry shared by castling generation and simulation.
KING_HOME_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0
KINGSIDE_KING_TO_FILE = 6
QUEENSIDE_KING_TO_FILE = 2
KINGSIDE_ROOK_TO_FILE = 5
QUEENSIDE_ROOK_TO_FILE = 3


def home_rank(color: Color) -> int:
    """Back rank of *color*: 0 for white, 7 for black."""
    return 0 if color == Color.WHITE else BOARD_SIZE - 1


def pawn_direction(color: Color) -> int:
    """Rank delta of a forward pawn step."""
    return 1 if color == Color.WHITE else -1


# -- Precomputed lookup tables ---------------------------------------------


def _all_squares() -> list[Square]:
    return [(f, r) for f in range(BOARD_SIZE) for r in range(BOARD_SIZE)]


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[Square, ...]]:
    targets: dict[Square, tuple[Square, ...]] = {}
    for file_idx, rank_idx in _all_squares():
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if in_bounds(af, ar):
                moves.append((af, ar))
        targets[(file_idx, rank_idx)] = tuple(moves)
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Square, tuple[tuple[Square, ...], ...]]:
    rays_per_square: dict[Square, tuple[tuple[Square, ...], ...]] = {}
    for file_idx, rank_idx in _all_squares():
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while in_bounds(af, ar):
                ray.append((af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square[(file_idx, rank_idx)] = tuple(square_rays)
    return rays_per_square


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


class MoveGenerator:
    """Generates pseudo-legal moves for single pieces of an :class:`Occupancy`.

    *last_move* is the move played immediately before the query; it is only
    consulted for en passant eligibility.
    """

    __slots__ = ("_occ", "_last_move")

    def __init__(self, occupancy: Occupancy, last_move: Move | None = None) -> None:
        self._occ = occupancy
        self._last_move = last_move

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self, piece: Piece) -> list[Move]:
        """All pseudo-legal moves of *piece* (may leave own king in check).

        A piece whose square text does not parse has no moves.
        """
        moves: list[Move] = []
        sq = parse_square(piece.square)
        if sq is None:
            return moves

        match piece.piece_type:
            case PieceType.PAWN:
                self._gen_pawn(sq, piece.color, moves)
            case PieceType.KNIGHT:
                self._gen_step(sq, piece.color, KNIGHT_TARGETS[sq], moves)
            case PieceType.BISHOP:
                self._gen_sliding(sq, piece.color, BISHOP_RAYS[sq], moves)
            case PieceType.ROOK:
                self._gen_sliding(sq, piece.color, ROOK_RAYS[sq], moves)
            case PieceType.QUEEN:
                self._gen_sliding(sq, piece.color, QUEEN_RAYS[sq], moves)
            case PieceType.KING:
                self._gen_step(sq, piece.color, KING_TARGETS[sq], moves)
                self._gen_castling(sq, piece, moves)
            case _:
                assert_never(piece.piece_type)
        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _gen_step(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        occ = self._occ
        from_name = square_name(*sq)
        for to_sq in targets:
            target = occ[to_sq]
            if target is None:
                moves.append(Move.normal(from_name, square_name(*to_sq)))
            elif target.color != color:
                moves.append(Move.normal(from_name, square_name(*to_sq), True))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        occ = self._occ
        from_name = square_name(*sq)
        for ray in rays:
            for to_sq in ray:
                target = occ[to_sq]
                if target is None:
                    moves.append(Move.normal(from_name, square_name(*to_sq)))
                    continue
                if target.color != color:
                    moves.append(Move.normal(from_name, square_name(*to_sq), True))
                break

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        occ = self._occ
        file_idx, rank_idx = sq
        direction = pawn_direction(color)
        start_rank = 1 if color == Color.WHITE else BOARD_SIZE - 2
        promotion_rank = BOARD_SIZE - 1 if color == Color.WHITE else 0
        from_name = square_name(*sq)

        one_rank = rank_idx + direction
        if not in_bounds(file_idx, one_rank):
            return

        # Pushes
        if occ.is_empty((file_idx, one_rank)):
            moves.append(
                Move(
                    from_name,
                    square_name(file_idx, one_rank),
                    is_promotion=one_rank == promotion_rank,
                )
            )
            two_rank = rank_idx + 2 * direction
            if rank_idx == start_rank and occ.is_empty((file_idx, two_rank)):
                moves.append(Move.normal(from_name, square_name(file_idx, two_rank)))

        # Captures
        for cap_file in (file_idx - 1, file_idx + 1):
            if not in_bounds(cap_file, one_rank):
                continue
            target = occ[(cap_file, one_rank)]
            if target is not None and target.color != color:
                moves.append(
                    Move(
                        from_name,
                        square_name(cap_file, one_rank),
                        is_capture=True,
                        is_promotion=one_rank == promotion_rank,
                    )
                )

        ep_move = self._en_passant(sq, color)
        if ep_move is not None:
            moves.append(ep_move)

    def _en_passant(self, sq: Square, color: Color) -> Move | None:
        """En passant capture enabled by the previous double pawn step."""
        last = self._last_move
        if last is None:
            return None
        last_from = parse_square(last.from_sq)
        last_to = parse_square(last.to_sq)
        if last_from is None or last_to is None:
            return None
        if abs(last_to[1] - last_from[1]) != 2 or last_to[0] != last_from[0]:
            return None

        file_idx, rank_idx = sq
        if last_to[1] != rank_idx or abs(last_to[0] - file_idx) != 1:
            return None

        pushed = self._occ[last_to]
        if (
            pushed is None
            or pushed.piece_type != PieceType.PAWN
            or pushed.color == color
        ):
            return None

        target = (last_to[0], rank_idx + pawn_direction(color))
        if not in_bounds(*target) or not self._occ.is_empty(target):
            return None

        return Move(
            square_name(*sq),
            square_name(*target),
            is_capture=True,
            is_en_passant=True,
            captured_square=square_name(*last_to),
        )

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        """Castling candidates; attack safety is checked by the legality filter."""
        if king.has_moved:
            return
        rank = home_rank(king.color)
        if king_sq != (KING_HOME_FILE, rank):
            return

        from_name = square_name(*king_sq)
        if self._castling_rook_ready(king.color, KINGSIDE_ROOK_FILE, rank):
            moves.append(
                Move(
                    from_name,
                    square_name(KINGSIDE_KING_TO_FILE, rank),
                    is_castle_kingside=True,
                )
            )
        if self._castling_rook_ready(king.color, QUEENSIDE_ROOK_FILE, rank):
            moves.append(
                Move(
                    from_name,
                    square_name(QUEENSIDE_KING_TO_FILE, rank),
                    is_castle_queenside=True,
                )
            )

    def _castling_rook_ready(self, color: Color, rook_file: int, rank: int) -> bool:
        occ = self._occ
        rook = occ[(rook_file, rank)]
        if (
            rook is None
            or rook.color != color
            or rook.piece_type != PieceType.ROOK
            or rook.has_moved
        ):
            return False
        low, high = sorted((rook_file, KING_HOME_FILE))
        return all(occ.is_empty((f, rank)) for f in range(low + 1, high))
