"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on concrete sides or views.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessclick.core.enums import Color, SideKind

if TYPE_CHECKING:
    from chessclick.core.errors import ControllerError
    from chessclick.core.move import Move
    from chessclick.core.outcome import GameOutcome
    from chessclick.core.types import Square
    from chessclick.engine.interfaces import Position
    from chessclick.game.selection import Selection


# ── Controller FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of the interaction controller."""

    NOT_STARTED = auto()
    IDLE = auto()
    SELECTED = auto()
    PENDING_PROMOTION = auto()
    AUTOMATED_TURN = auto()  # engine is computing
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a game participant (human or automated)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def kind(self) -> SideKind: ...

    @property
    def is_human(self) -> bool:
        return self.kind is SideKind.HUMAN

    @abstractmethod
    def request_move(self, position: Position, request_id: int) -> None:
        """Begin an asynchronous move search (no-op for humans)."""

    @abstractmethod
    def cancel(self) -> None:
        """Cancel an ongoing move computation (no-op for humans)."""


class IBoardObserver(ABC):
    """Callbacks the controller drives on the board view.

    The view never mutates controller state; it renders from these
    notifications and raises clicks back into the controller.
    """

    @abstractmethod
    def on_selection_changed(
        self, old: Selection | None, new: Selection | None
    ) -> None: ...

    @abstractmethod
    def on_move_committed(self, move: Move) -> None:
        """One notification per move; castles include the rook relocation."""

    @abstractmethod
    def on_promotion_offered(self, candidates: tuple[Move, ...]) -> None: ...

    @abstractmethod
    def on_promotion_resolved(self) -> None: ...

    @abstractmethod
    def on_check_changed(self, king_square: Square | None) -> None: ...

    @abstractmethod
    def on_game_ended(self, outcome: GameOutcome) -> None: ...

    def on_error(self, error: ControllerError) -> None:
        """A recoverable controller error occurred."""

    def on_phase_changed(self, phase: GamePhase) -> None:
        """The controller entered *phase*."""
