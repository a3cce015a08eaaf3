"""Game end evaluator — classifies a freshly committed position."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from chessclick.core.enums import DrawReason
from chessclick.core.outcome import ONGOING, Draw, GameOutcome, Win

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.engine.interfaces import IRulesEngine, Position

# 100 half-moves = 50 full moves without capture or pawn advance
FIFTY_MOVE_HALFMOVES = 100


class GameEndEvaluator:
    """Pure with respect to its inputs; queries check status only when the
    side to move has no legal reply."""

    __slots__ = ("_engine",)

    def __init__(self, engine: IRulesEngine) -> None:
        self._engine = engine

    def evaluate(self, position: Position, legal_moves: Sequence[Move]) -> GameOutcome:
        if position.halfmove_clock >= FIFTY_MOVE_HALFMOVES:
            return Draw(DrawReason.FIFTY_MOVE_RULE)
        if legal_moves:
            return ONGOING
        if self._engine.check_status(position).in_check:
            return Win(position.side_to_move.opposite)
        return Draw(DrawReason.STALEMATE)
