"""Tests for EngineSession wiring."""

from __future__ import annotations

import time
import weakref

from PyQt6.QtCore import QThread

from chessclick.core.enums import Color, SideKind
from chessclick.core.move import Move
from chessclick.engine.rules import PythonChessRules
from chessclick.ui.engine_session import EngineSession


class _StubController:
    def __init__(self) -> None:
        self.delivered: list[tuple[int, object, Move]] = []

    def deliver_automated_move(
        self, request_id: int, position: object, move: Move
    ) -> bool:
        self.delivered.append((request_id, position, move))
        return True


def _make_session(
    statuses: list[str] | None = None,
) -> tuple[EngineSession, _StubController]:
    controller = _StubController()
    sink = statuses if statuses is not None else []
    session = EngineSession(
        controller=controller,
        set_status=sink.append,
        max_depth=1,
        time_limit_ms=500,
    )
    return session, controller


class TestEngineSession:
    def test_shutdown_before_setup_is_noop(self) -> None:
        session, _ = _make_session()
        session.shutdown()
        assert session.is_started is False

    def test_setup_twice_keeps_started_state(self) -> None:
        session, _ = _make_session()
        session.setup()
        session.setup()
        assert session.is_started is True
        session.shutdown()
        assert session.is_started is False

    def test_supports_weak_references(self) -> None:
        session, _ = _make_session()
        assert weakref.ref(session)() is session

    def test_create_automated_side(self) -> None:
        session, _ = _make_session()
        side = session.create_automated_side(Color.BLACK)
        assert side.kind is SideKind.AUTOMATED
        assert side.color == Color.BLACK
        assert side.is_asynchronous

    def test_request_dropped_when_not_started(self) -> None:
        statuses: list[str] = []
        session, controller = _make_session(statuses)
        session.request_move(PythonChessRules().initial_position(), 1)
        assert statuses == []
        assert controller.delivered == []

    def test_best_move_is_forwarded(self) -> None:
        session, controller = _make_session()
        move = Move(12, 28)
        session._on_engine_best_move(4, "position", move)
        session._on_engine_best_move(5, "position", "not a move")
        assert controller.delivered == [(4, "position", move)]

    def test_failures_ask_for_new_game(self) -> None:
        statuses: list[str] = []
        session, _ = _make_session(statuses)
        session._on_engine_error(2, "boom")
        session._on_engine_no_move(3)
        assert statuses == [
            "Engine error: boom; start a new game",
            "Engine produced no move; start a new game",
        ]

    def test_search_round_trip(self, qapp) -> None:
        statuses: list[str] = []
        session, controller = _make_session(statuses)
        session.setup()
        try:
            rules = PythonChessRules()
            session.request_move(rules.initial_position(), 7)
            assert statuses == ["Engine is thinking…"]

            deadline = time.monotonic() + 10.0
            while not controller.delivered and time.monotonic() < deadline:
                qapp.processEvents()
                QThread.msleep(10)
        finally:
            session.shutdown()

        assert len(controller.delivered) == 1
        request_id, position, move = controller.delivered[0]
        assert request_id == 7
        assert move in rules.legal_moves(rules.initial_position())
        assert position == rules.apply_move(rules.initial_position(), move)
