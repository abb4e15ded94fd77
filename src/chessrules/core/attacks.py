"""Attack detection: is a square attacked by a given color?

Independent of whose turn it is; used both for check detection and for
castling-path safety.
"""

from __future__ import annotations

import logging

from chessrules.core.enums import Color, PieceType
from chessrules.core.move_generator import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    ROOK_RAYS,
    pawn_direction,
)
from chessrules.core.occupancy import Occupancy
from chessrules.core.types import Square, in_bounds

_LOGGER = logging.getLogger(__name__)

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def is_square_attacked(sq: Square, by_color: Color, occupancy: Occupancy) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    if not in_bounds(*sq):
        return False
    occ = occupancy
    if _attacked_by_pawn(sq, by_color, occ):
        return True
    if _attacked_by_stepper(sq, by_color, occ, KNIGHT_TARGETS, PieceType.KNIGHT):
        return True
    if _attacked_by_stepper(sq, by_color, occ, KING_TARGETS, PieceType.KING):
        return True
    if _attacked_by_slider(sq, by_color, occ, ROOK_RAYS, _ORTHOGONAL_ATTACKERS):
        return True
    return _attacked_by_slider(sq, by_color, occ, BISHOP_RAYS, _DIAGONAL_ATTACKERS)


def is_king_in_check(color: Color, occupancy: Occupancy) -> bool:
    """Is *color*'s king attacked by the opponent?

    A missing king is not in check; the position is incomplete and the
    condition is logged rather than raised.
    """
    king_sq = occupancy.find_king(color)
    if king_sq is None:
        _LOGGER.warning("No %s king on board; treating as not in check", color)
        return False
    return is_square_attacked(king_sq, color.opposite, occupancy)


# -- Individual attacker tests ----------------------------------------------


def _attacked_by_pawn(sq: Square, by_color: Color, occ: Occupancy) -> bool:
    # Attacking pawns stand one rank behind the square, seen from their side.
    file_idx, rank_idx = sq
    origin_rank = rank_idx - pawn_direction(by_color)
    for origin_file in (file_idx - 1, file_idx + 1):
        if not in_bounds(origin_file, origin_rank):
            continue
        piece = occ[(origin_file, origin_rank)]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.PAWN
        ):
            return True
    return False


def _attacked_by_stepper(
    sq: Square,
    by_color: Color,
    occ: Occupancy,
    targets: dict[Square, tuple[Square, ...]],
    piece_type: PieceType,
) -> bool:
    for from_sq in targets[sq]:
        piece = occ[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == piece_type
        ):
            return True
    return False


def _attacked_by_slider(
    sq: Square,
    by_color: Color,
    occ: Occupancy,
    rays: dict[Square, tuple[tuple[Square, ...], ...]],
    attacker_types: tuple[PieceType, ...],
) -> bool:
    for ray in rays[sq]:
        for from_sq in ray:
            piece = occ[from_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in attacker_types:
                return True
            break
    return False
