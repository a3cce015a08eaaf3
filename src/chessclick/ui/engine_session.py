"""Engine search session orchestration for the main UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from chessclick.core.move import Move
from chessclick.engine.qt_bridge import EngineWorker
from chessclick.game.player import AutomatedSide

if TYPE_CHECKING:
    from chessclick.core.enums import Color
    from chessclick.engine.interfaces import Position
    from chessclick.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class _EngineCommandBus(QObject):
    """Signal bridge for issuing worker commands with queued delivery."""

    search_requested = pyqtSignal(object, int)
    set_limits_requested = pyqtSignal(int, int)


class EngineSession:
    """Owns the worker-thread search lifecycle and hands results back to the
    controller on the UI thread."""

    __slots__ = (
        "__weakref__",
        "_controller",
        "_set_status",
        "_command_bus",
        "_engine_thread",
        "_engine_worker",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        set_status: Callable[[str], None],
        parent: QObject | None = None,
        max_depth: int = 3,
        time_limit_ms: int = 700,
    ) -> None:
        self._controller = controller
        self._set_status = set_status
        self._command_bus = _EngineCommandBus(parent)
        self._engine_thread = QThread(parent)
        self._engine_worker = EngineWorker(
            max_depth=max_depth, time_limit_ms=time_limit_ms
        )
        self._is_shutting_down = False
        self._is_started = False

    @property
    def is_started(self) -> bool:
        return self._is_started

    def setup(self) -> None:
        """Start the engine worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._engine_worker.moveToThread(self._engine_thread)
        self._command_bus.search_requested.connect(self._engine_worker.request_move)
        self._command_bus.set_limits_requested.connect(self._engine_worker.set_limits)
        self._engine_worker.best_move_ready.connect(self._on_engine_best_move)
        self._engine_worker.search_cancelled.connect(self._on_engine_cancelled)
        self._engine_worker.search_no_move.connect(self._on_engine_no_move)
        self._engine_worker.search_error.connect(self._on_engine_error)
        self._engine_thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Stop any active search and shut down the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_search()
        self._engine_thread.quit()
        self._engine_thread.wait(2000)
        self._is_started = False

    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update engine limits for subsequent searches."""
        if self._is_started:
            self._command_bus.set_limits_requested.emit(max_depth, time_limit_ms)
            return
        self._engine_worker.set_limits(max_depth, time_limit_ms)

    def create_automated_side(self, color: Color) -> AutomatedSide:
        """Create an engine side wired to this session."""
        return AutomatedSide(
            color,
            "Engine",
            on_request_move=self.request_move,
            on_cancel=self.cancel_search,
        )

    def request_move(self, position: Position, request_id: int) -> None:
        """Queue a best-move search for *position*."""
        if not self._is_started or self._is_shutting_down:
            _LOGGER.warning("Engine request %d dropped: session not running", request_id)
            return
        self._set_status("Engine is thinking…")
        self._command_bus.search_requested.emit(position, request_id)

    def cancel_search(self) -> None:
        """Ask the worker to abandon the running search."""
        # Only sets a threading.Event, safe to call across threads.
        self._engine_worker.cancel()

    # ── Worker callbacks (UI thread) ─────────────────────────────────────

    def _on_engine_best_move(
        self, request_id: int, position_obj: object, move_obj: object
    ) -> None:
        if self._is_shutting_down or not isinstance(move_obj, Move):
            return
        self._controller.deliver_automated_move(request_id, position_obj, move_obj)

    def _on_engine_cancelled(self, request_id: int) -> None:
        _LOGGER.debug("Engine request %d cancelled", request_id)

    def _on_engine_no_move(self, request_id: int) -> None:
        if self._is_shutting_down:
            return
        _LOGGER.warning("Engine produced no move for request %d", request_id)
        self._set_status("Engine produced no move; start a new game")

    def _on_engine_error(self, request_id: int, message: str) -> None:
        if self._is_shutting_down:
            return
        _LOGGER.error("Engine error for request %d: %s", request_id, message)
        self._set_status(f"Engine error: {message}; start a new game")
