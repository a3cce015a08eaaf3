"""Game interaction layer — controller, sides, session and its components.

Quick start::

    from chessclick.core import Color, parse_square
    from chessclick.engine import PythonChessRules
    from chessclick.game import AutomatedSide, GameController, HumanSide

    ctrl = GameController(PythonChessRules())
    ctrl.new_game(
        white=HumanSide(Color.WHITE, "Alice"),
        black=AutomatedSide(Color.BLACK),
    )
    ctrl.select_square(parse_square("e2"))
    ctrl.select_square(parse_square("e4"))  # commits e2e4, engine replies
"""

from chessclick.game.controller import GameController
from chessclick.game.dispatcher import TurnDispatcher
from chessclick.game.evaluator import FIFTY_MOVE_HALFMOVES, GameEndEvaluator
from chessclick.game.events import GameEvents
from chessclick.game.executor import ROOK_RELOCATIONS, MoveExecutor, rook_relocation
from chessclick.game.interfaces import GamePhase, IBoardObserver, IPlayer
from chessclick.game.player import AutomatedSide, HumanSide
from chessclick.game.promotion import PromotionResolver
from chessclick.game.selection import Selection, SelectionTracker
from chessclick.game.session import SessionContext

__all__ = [
    # Interfaces
    "GamePhase",
    "IBoardObserver",
    "IPlayer",
    # Components
    "FIFTY_MOVE_HALFMOVES",
    "GameEndEvaluator",
    "MoveExecutor",
    "PromotionResolver",
    "ROOK_RELOCATIONS",
    "SelectionTracker",
    "TurnDispatcher",
    "rook_relocation",
    # Concrete
    "AutomatedSide",
    "GameController",
    "GameEvents",
    "HumanSide",
    "Selection",
    "SessionContext",
]
