"""Tests for the Qt engine worker."""

import pytest
from PyQt6.QtTest import QSignalSpy

from chessclick.core.move import Move
from chessclick.core.types import parse_square
from chessclick.engine.qt_bridge import EngineWorker
from chessclick.engine.rules import PythonChessRules

pytestmark = pytest.mark.usefixtures("qapp")


class _CancellingRules:
    def __init__(self, worker: EngineWorker, reply: object) -> None:
        self._worker = worker
        self._reply = reply

    def best_move(self, position, is_cancelled=None):
        self._worker.cancel()
        return self._reply


class _ExplodingRules:
    def best_move(self, position, is_cancelled=None):
        raise RuntimeError("boom")


class TestEngineWorker:
    def test_emits_best_move(self, rules: PythonChessRules) -> None:
        worker = EngineWorker(max_depth=2, time_limit_ms=None)
        spy = QSignalSpy(worker.best_move_ready)
        pos = rules.position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")

        worker.request_move(pos, 7)

        assert len(spy) == 1
        request_id, new_position, move = spy[0]
        assert request_id == 7
        assert move == Move(parse_square("a1"), parse_square("a8"))
        assert rules.check_status(new_position).in_check

    def test_invalid_position(self) -> None:
        worker = EngineWorker()
        spy = QSignalSpy(worker.search_error)
        worker.request_move("not a position", 3)
        assert len(spy) == 1
        assert spy[0][0] == 3

    def test_no_move_in_terminal_position(self, rules: PythonChessRules) -> None:
        worker = EngineWorker(max_depth=1, time_limit_ms=None)
        spy = QSignalSpy(worker.search_no_move)
        worker.request_move(rules.position_from_fen("k7/2Q5/8/8/8/8/8/K7 b - - 0 1"), 4)
        assert len(spy) == 1
        assert spy[0][0] == 4

    def test_search_failure_is_reported(self, rules: PythonChessRules) -> None:
        worker = EngineWorker()
        worker._rules = _ExplodingRules()
        spy = QSignalSpy(worker.search_error)
        worker.request_move(rules.initial_position(), 5)
        assert len(spy) == 1
        assert spy[0][1] == "boom"

    def test_cancelled_search(self, rules: PythonChessRules) -> None:
        worker = EngineWorker()
        pos = rules.initial_position()
        worker._rules = _CancellingRules(worker, (pos, Move(12, 28)))
        ready = QSignalSpy(worker.best_move_ready)
        cancelled = QSignalSpy(worker.search_cancelled)

        worker.request_move(pos, 9)

        assert len(ready) == 0
        assert len(cancelled) == 1
        assert cancelled[0][0] == 9

    def test_cancel_flag_is_reset_per_request(self, rules: PythonChessRules) -> None:
        worker = EngineWorker(max_depth=1, time_limit_ms=None)
        worker.cancel()
        spy = QSignalSpy(worker.best_move_ready)
        worker.request_move(rules.initial_position(), 1)
        assert len(spy) == 1
