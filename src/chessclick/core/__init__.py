"""Core domain layer — value types shared by the controller and the engine.

Quick start::

    from chessclick.core import Move, parse_square

    move = Move(parse_square("e2"), parse_square("e4"))
    print(move.uci)
"""

from chessclick.core.enums import (
    PROMOTION_PIECES,
    Color,
    DrawReason,
    PieceType,
    SideKind,
)
from chessclick.core.errors import (
    ControllerError,
    IllegalMove,
    InvalidState,
    NotACandidate,
    TurnViolation,
)
from chessclick.core.move import Move
from chessclick.core.outcome import ONGOING, Draw, GameOutcome, Ongoing, Win
from chessclick.core.piece import Piece
from chessclick.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "PROMOTION_PIECES",
    "Color",
    "DrawReason",
    "PieceType",
    "SideKind",
    # Errors
    "ControllerError",
    "IllegalMove",
    "InvalidState",
    "NotACandidate",
    "TurnViolation",
    # Types / helpers
    "Square",
    "file_of",
    "is_valid_square",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Move",
    "Piece",
    # Outcomes
    "ONGOING",
    "Draw",
    "GameOutcome",
    "Ongoing",
    "Win",
]
