"""Legality filtering and game-end detection: check, checkmate, stalemate."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.attacks import is_king_in_check, is_square_attacked
from chessrules.core.enums import Color, GameResult, GameStatus
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    KINGSIDE_KING_TO_FILE,
    KINGSIDE_ROOK_FILE,
    KINGSIDE_ROOK_TO_FILE,
    QUEENSIDE_KING_TO_FILE,
    QUEENSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_TO_FILE,
    MoveGenerator,
)
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece
from chessrules.core.types import Square, parse_square

_LOGGER = logging.getLogger(__name__)


# ── Simulation ───────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MoveUndo:
    """Everything :func:`simulate_move` touched, so it can be put back."""

    mover: Piece
    from_sq: Square
    to_sq: Square
    captured: Piece | None = None
    capture_sq: Square | None = None
    rook: Piece | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None


def simulate_move(occupancy: Occupancy, move: Move) -> MoveUndo:
    """Apply *move* to *occupancy* in place and return its undo record.

    Relocates the mover, removes the captured piece (en passant removes the
    pawn beside the destination) and slides the castling rook.
    """
    from_sq = parse_square(move.from_sq)
    to_sq = parse_square(move.to_sq)
    capture_sq = parse_square(move.capture_square)
    if from_sq is None or to_sq is None or capture_sq is None:
        raise ValueError(f"Malformed square in move {move}")
    mover = occupancy[from_sq]
    if mover is None:
        raise ValueError(f"No piece on {move.from_sq}")

    captured = occupancy[capture_sq]
    if captured is not None:
        occupancy[capture_sq] = None

    occupancy[from_sq] = None
    occupancy[to_sq] = mover

    if not move.is_castle:
        return MoveUndo(mover, from_sq, to_sq, captured, capture_sq)

    rank = from_sq[1]
    if move.is_castle_kingside:
        rook_from = (KINGSIDE_ROOK_FILE, rank)
        rook_to = (KINGSIDE_ROOK_TO_FILE, rank)
    else:
        rook_from = (QUEENSIDE_ROOK_FILE, rank)
        rook_to = (QUEENSIDE_ROOK_TO_FILE, rank)
    rook = occupancy[rook_from]
    occupancy[rook_from] = None
    occupancy[rook_to] = rook
    return MoveUndo(
        mover, from_sq, to_sq, captured, capture_sq, rook, rook_from, rook_to
    )


def undo_move(occupancy: Occupancy, undo: MoveUndo) -> None:
    """Restore *occupancy* exactly as it was before :func:`simulate_move`."""
    if undo.rook_from is not None and undo.rook_to is not None:
        occupancy[undo.rook_to] = None
        occupancy[undo.rook_from] = undo.rook

    occupancy[undo.to_sq] = None
    occupancy[undo.from_sq] = undo.mover

    if undo.captured is not None and undo.capture_sq is not None:
        occupancy[undo.capture_sq] = undo.captured


# ── Rules ────────────────────────────────────────────────────────────────────


class Rules:
    """Static rule-checker over an :class:`Occupancy` snapshot.

    Queries are pure: the caller's occupancy is never modified, and
    identical inputs always produce identical results. Legality is only
    defined once both kings are on the board; before that every piece has
    no legal moves and :meth:`game_status` reports ``SETUP``.
    """

    @staticmethod
    def legal_moves(
        piece: Piece, occupancy: Occupancy, last_move: Move | None = None
    ) -> list[Move]:
        """Moves of *piece* that do not leave its own king in check."""
        legal: list[Move] = []
        if not occupancy.has_both_kings:
            _LOGGER.debug("Legal moves undefined: position is still in setup")
            return legal

        sq = parse_square(piece.square)
        if sq is None or occupancy[sq] is not piece:
            return legal

        scratch = occupancy.copy()
        gen = MoveGenerator(scratch, last_move)
        for move in gen.generate_pseudo_legal_moves(piece):
            if move.is_castle and not Rules._is_castling_path_safe(
                piece.color, scratch, move
            ):
                continue
            undo = simulate_move(scratch, move)
            in_check = is_king_in_check(piece.color, scratch)
            undo_move(scratch, undo)
            if not in_check:
                legal.append(move)
        return legal

    @staticmethod
    def _is_castling_path_safe(color: Color, occupancy: Occupancy, move: Move) -> bool:
        """King not in check, and neither crossed nor destination square attacked."""
        if is_king_in_check(color, occupancy):
            return False
        from_sq = parse_square(move.from_sq)
        if from_sq is None:
            return False

        rank = from_sq[1]
        if move.is_castle_kingside:
            path = (KINGSIDE_ROOK_TO_FILE, KINGSIDE_KING_TO_FILE)
        else:
            path = (QUEENSIDE_ROOK_TO_FILE, QUEENSIDE_KING_TO_FILE)
        attacker = color.opposite
        return not any(
            is_square_attacked((file, rank), attacker, occupancy) for file in path
        )

    @staticmethod
    def is_king_in_check(color: Color, occupancy: Occupancy) -> bool:
        return is_king_in_check(color, occupancy)

    @staticmethod
    def has_any_legal_move(
        color: Color, occupancy: Occupancy, last_move: Move | None = None
    ) -> bool:
        """Whether any piece of *color* has at least one legal move."""
        return any(
            Rules.legal_moves(piece, occupancy, last_move)
            for piece in occupancy.pieces(color)
        )

    @staticmethod
    def is_checkmate(
        color: Color, occupancy: Occupancy, last_move: Move | None = None
    ) -> bool:
        return Rules.game_status(color, occupancy, last_move) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(
        color: Color, occupancy: Occupancy, last_move: Move | None = None
    ) -> bool:
        return Rules.game_status(color, occupancy, last_move) == GameStatus.STALEMATE

    @staticmethod
    def game_status(
        color: Color, occupancy: Occupancy, last_move: Move | None = None
    ) -> GameStatus:
        """Status of the position with *color* to move."""
        if not occupancy.has_both_kings:
            return GameStatus.SETUP

        in_check = is_king_in_check(color, occupancy)
        if Rules.has_any_legal_move(color, occupancy, last_move):
            return GameStatus.CHECK if in_check else GameStatus.ONGOING
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE

    @staticmethod
    def game_result(
        color: Color, occupancy: Occupancy, last_move: Move | None = None
    ) -> GameResult:
        """Determine the game result with *color* to move."""
        status = Rules.game_status(color, occupancy, last_move)
        if status == GameStatus.CHECKMATE:
            return (
                GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
            )
        if status == GameStatus.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
