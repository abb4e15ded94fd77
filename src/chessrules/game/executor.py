"""Move executor: applies a chosen legal move to the live piece set."""

from __future__ import annotations

import logging

from chessrules.core.enums import PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    KINGSIDE_ROOK_FILE,
    KINGSIDE_ROOK_TO_FILE,
    QUEENSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_TO_FILE,
)
from chessrules.core.piece import Piece
from chessrules.core.types import parse_square, square_name
from chessrules.game.interfaces import IMoveExecutor

_LOGGER = logging.getLogger(__name__)


class MoveExecutor(IMoveExecutor):
    """Relocates pieces, removes captures and promotes pawns in place."""

    def execute(self, pieces: list[Piece], piece: Piece, move: Move) -> Piece | None:
        captured: Piece | None = None
        if move.is_capture:
            captured = _find_piece(pieces, move.capture_square, exclude=piece)
            if captured is None:
                _LOGGER.error("Captured piece not found on %s", move.capture_square)
            else:
                pieces.remove(captured)

        piece.square = move.to_sq
        piece.has_moved = True

        if move.is_castle:
            self._move_castling_rook(pieces, move)

        if move.is_promotion and piece.piece_type == PieceType.PAWN:
            piece.piece_type = move.promotion

        return captured

    @staticmethod
    def _move_castling_rook(pieces: list[Piece], move: Move) -> None:
        king_from = parse_square(move.from_sq)
        if king_from is None:
            _LOGGER.error("Malformed castling origin %r", move.from_sq)
            return
        rank = king_from[1]
        if move.is_castle_kingside:
            rook_from = square_name(KINGSIDE_ROOK_FILE, rank)
            rook_to = square_name(KINGSIDE_ROOK_TO_FILE, rank)
        else:
            rook_from = square_name(QUEENSIDE_ROOK_FILE, rank)
            rook_to = square_name(QUEENSIDE_ROOK_TO_FILE, rank)

        rook = _find_piece(pieces, rook_from)
        if rook is None:
            _LOGGER.error("Castling rook not found at %s", rook_from)
            return
        rook.square = rook_to
        rook.has_moved = True


def _find_piece(
    pieces: list[Piece], square: str, exclude: Piece | None = None
) -> Piece | None:
    for candidate in pieces:
        if candidate.square == square and candidate is not exclude:
            return candidate
    return None
