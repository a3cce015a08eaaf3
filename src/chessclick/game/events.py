"""Observable callbacks raised by the controller toward the board view."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessclick.core.errors import ControllerError
    from chessclick.core.move import Move
    from chessclick.core.outcome import GameOutcome
    from chessclick.core.types import Square
    from chessclick.game.interfaces import GamePhase, IBoardObserver
    from chessclick.game.selection import Selection

SelectionCallback = Callable[["Selection | None", "Selection | None"], None]
MoveCallback = Callable[["Move"], None]
PromotionOfferedCallback = Callable[[tuple["Move", ...]], None]
PromotionResolvedCallback = Callable[[], None]
CheckCallback = Callable[["Square | None"], None]
GameEndedCallback = Callable[["GameOutcome"], None]
ErrorCallback = Callable[["ControllerError"], None]
PhaseCallback = Callable[["GamePhase"], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_move_committed: list[MoveCallback] = field(default_factory=list)
    on_promotion_offered: list[PromotionOfferedCallback] = field(
        default_factory=list
    )
    on_promotion_resolved: list[PromotionResolvedCallback] = field(
        default_factory=list
    )
    on_check_changed: list[CheckCallback] = field(default_factory=list)
    on_game_ended: list[GameEndedCallback] = field(default_factory=list)
    on_error: list[ErrorCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)

    def subscribe(self, observer: IBoardObserver) -> None:
        """Register every callback of *observer*."""
        self.on_selection_changed.append(observer.on_selection_changed)
        self.on_move_committed.append(observer.on_move_committed)
        self.on_promotion_offered.append(observer.on_promotion_offered)
        self.on_promotion_resolved.append(observer.on_promotion_resolved)
        self.on_check_changed.append(observer.on_check_changed)
        self.on_game_ended.append(observer.on_game_ended)
        self.on_error.append(observer.on_error)
        self.on_phase_changed.append(observer.on_phase_changed)

    def clear(self) -> None:
        for handlers in (
            self.on_selection_changed,
            self.on_move_committed,
            self.on_promotion_offered,
            self.on_promotion_resolved,
            self.on_check_changed,
            self.on_game_ended,
            self.on_error,
            self.on_phase_changed,
        ):
            handlers.clear()

    # ── Emitters ─────────────────────────────────────────────────────────

    def emit_selection_changed(
        self, old: Selection | None, new: Selection | None
    ) -> None:
        for cb in list(self.on_selection_changed):
            cb(old, new)

    def emit_move_committed(self, move: Move) -> None:
        for cb in list(self.on_move_committed):
            cb(move)

    def emit_promotion_offered(self, candidates: tuple[Move, ...]) -> None:
        for cb in list(self.on_promotion_offered):
            cb(candidates)

    def emit_promotion_resolved(self) -> None:
        for cb in list(self.on_promotion_resolved):
            cb()

    def emit_check_changed(self, king_square: Square | None) -> None:
        for cb in list(self.on_check_changed):
            cb(king_square)

    def emit_game_ended(self, outcome: GameOutcome) -> None:
        for cb in list(self.on_game_ended):
            cb(outcome)

    def emit_error(self, error: ControllerError) -> None:
        for cb in list(self.on_error):
            cb(error)

    def emit_phase_changed(self, phase: GamePhase) -> None:
        for cb in list(self.on_phase_changed):
            cb(phase)
