"""Abstract rules-engine contract consumed by the interaction controller.

The controller never computes legality or evaluates positions itself; it
depends on :class:`IRulesEngine` and treats positions as opaque handles.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chessclick.core.enums import Color
    from chessclick.core.move import Move
    from chessclick.core.piece import Piece
    from chessclick.core.types import Square


class Position(Protocol):
    """Opaque, immutable game-state snapshot produced by a rules engine."""

    @property
    def side_to_move(self) -> Color: ...

    @property
    def halfmove_clock(self) -> int:
        """Half-moves since the last capture or pawn advance."""
        ...


@dataclass(frozen=True, slots=True)
class CheckStatus:
    """Result of a check query for the side to move."""

    in_check: bool
    king_square: Square | None


class IRulesEngine(ABC):
    """Interface for the chess rules collaborator."""

    @abstractmethod
    def initial_position(self) -> Position:
        """Starting layout, white to move."""

    @abstractmethod
    def position_from_fen(self, fen: str) -> Position:
        """Build a position from a FEN string (``ValueError`` if malformed)."""

    @abstractmethod
    def legal_moves(self, position: Position) -> Sequence[Move]:
        """Ordered legal moves for the side to move."""

    @abstractmethod
    def apply_move(self, position: Position, move: Move) -> Position:
        """Return the position after *move*.

        Raises:
            IllegalMove: *move* is not in ``legal_moves(position)``.
        """

    @abstractmethod
    def check_status(self, position: Position) -> CheckStatus: ...

    @abstractmethod
    def best_move(self, position: Position) -> tuple[Position, Move]:
        """Search for the side to move; may be expensive."""

    @abstractmethod
    def square_contents(self, position: Position, index: Square) -> Piece | None: ...
