"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Occupancy, Rules, standard_pieces

    pieces = standard_pieces()
    occ = Occupancy.from_pieces(pieces)
    for move in Rules.legal_moves(occ.at("G1"), occ):
        print(move)
"""

from chessrules.core.attacks import is_king_in_check, is_square_attacked
from chessrules.core.enums import Color, GameResult, GameStatus, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.occupancy import Occupancy
from chessrules.core.piece import Piece, standard_pieces
from chessrules.core.rules import MoveUndo, Rules, simulate_move, undo_move
from chessrules.core.types import Square, in_bounds, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "in_bounds",
    "parse_square",
    "square_name",
    # Domain objects
    "Move",
    "MoveGenerator",
    "MoveUndo",
    "Occupancy",
    "Piece",
    "Rules",
    "standard_pieces",
    # Attack detection / simulation
    "is_king_in_check",
    "is_square_attacked",
    "simulate_move",
    "undo_move",
]
