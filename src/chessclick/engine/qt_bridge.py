"""Qt bridge to run best-move searches in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessclick.core.errors import InvalidState
from chessclick.engine.rules import BoardPosition, PythonChessRules
from chessclick.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    ``best_move_ready`` carries ``(request_id, new_position, move)``, the
    same pair the rules engine's best-move query returns.
    """

    best_move_ready = pyqtSignal(int, object, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_rules")

    def __init__(
        self,
        *,
        max_depth: int = 3,
        time_limit_ms: int | None = 700,
    ) -> None:
        super().__init__()
        self._rules = PythonChessRules(
            SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        )
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit the result."""
        if not isinstance(position_obj, BoardPosition):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            new_position, move = self._rules.best_move(
                position_obj, is_cancelled=self._cancel_event.is_set
            )
        except InvalidState:
            self.search_no_move.emit(request_id)
            return
        except Exception as exc:
            _LOGGER.exception("Engine search failed for request %d", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(request_id, new_position, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int, int)
    def set_limits(self, max_depth: int, time_limit_ms: int) -> None:
        """Update search limits (takes effect on the next search)."""
        self._rules.set_limits(
            SearchLimits(max_depth=max_depth, time_limit_ms=time_limit_ms)
        )
