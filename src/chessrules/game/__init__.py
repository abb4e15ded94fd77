"""Game management layer: live piece set, turn order, move execution.

Quick start::

    from chessrules.game import GameState

    game = GameState()
    game.setup()
    game.apply_move(game.piece_at("E2"), "E4")
"""

from chessrules.game.executor import MoveExecutor
from chessrules.game.interfaces import GamePhase, IMoveExecutor
from chessrules.game.state import GameState, IllegalMoveError, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IMoveExecutor",
    # Concrete
    "GameState",
    "IllegalMoveError",
    "MoveExecutor",
    "MoveRecord",
]
