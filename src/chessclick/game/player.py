"""Concrete side implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from chessclick.core.enums import Color, SideKind
from chessclick.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessclick.engine.interfaces import Position


class HumanSide(IPlayer):
    """A human participant — moves come from board clicks."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> SideKind:
        return SideKind.HUMAN

    def request_move(self, position: Position, request_id: int) -> None:
        pass  # Human moves arrive via controller.select_square()

    def cancel(self) -> None:
        pass


class AutomatedSide(IPlayer):
    """A side whose moves come from the rules engine's best-move search.

    Without ``on_request_move`` the controller queries the engine
    synchronously.  With it, the search is handed off (in the Qt app, to a
    worker thread) and the result comes back through
    ``GameController.deliver_automated_move``.

    Args:
        color: Side the engine plays.
        name: Display name.
        on_request_move: ``(Position, request_id) -> None`` — schedules an
            asynchronous search.
        on_cancel: ``() -> None`` — aborts a running search.
    """

    __slots__ = ("_color", "_name", "_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Engine",
        on_request_move: Callable[[Position, int], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def kind(self) -> SideKind:
        return SideKind.AUTOMATED

    @property
    def is_asynchronous(self) -> bool:
        return self._on_request_move is not None

    def request_move(self, position: Position, request_id: int) -> None:
        if self._on_request_move is not None:
            self._on_request_move(position, request_id)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
