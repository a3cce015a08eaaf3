"""Rules-engine package: the abstract contract and its python-chess backend.

The Qt worker lives in :mod:`chessclick.engine.qt_bridge` and is imported
on demand so that the non-UI layers stay free of PyQt.
"""

from chessclick.engine.interfaces import CheckStatus, IRulesEngine, Position
from chessclick.engine.rules import BoardPosition, PythonChessRules
from chessclick.engine.search import NegamaxSearcher, SearchLimits, SearchResult

__all__ = [
    "BoardPosition",
    "CheckStatus",
    "IRulesEngine",
    "NegamaxSearcher",
    "Position",
    "PythonChessRules",
    "SearchLimits",
    "SearchResult",
]
