"""Tests for the turn dispatcher."""

from chessclick.core.enums import Color
from chessclick.core.move import Move
from chessclick.engine.rules import PythonChessRules
from chessclick.engine.search import SearchLimits
from chessclick.game.dispatcher import TurnDispatcher
from chessclick.game.player import AutomatedSide, HumanSide
from chessclick.game.session import SessionContext


class _CountingRules(PythonChessRules):
    def __init__(self) -> None:
        super().__init__(SearchLimits(max_depth=1, time_limit_ms=None))
        self.best_move_calls = 0

    def best_move(self, position, is_cancelled=None):
        self.best_move_calls += 1
        return super().best_move(position, is_cancelled)


def _make_dispatcher(rules, white, black):
    session = SessionContext(rules.initial_position())
    session.players = {Color.WHITE: white, Color.BLACK: black}
    delivered: list[Move] = []

    def deliver(new_position, move) -> None:
        session.position = new_position
        delivered.append(move)

    return TurnDispatcher(session, rules, deliver), session, delivered


class TestTurnDispatcher:
    def test_human_turn_is_noop(self) -> None:
        rules = _CountingRules()
        dispatcher, session, delivered = _make_dispatcher(
            rules, HumanSide(Color.WHITE), AutomatedSide(Color.BLACK)
        )
        assert not dispatcher.maybe_auto_move(session.position)
        assert rules.best_move_calls == 0
        assert delivered == []

    def test_synchronous_side_is_searched_once(self) -> None:
        rules = _CountingRules()
        dispatcher, session, delivered = _make_dispatcher(
            rules, AutomatedSide(Color.WHITE), HumanSide(Color.BLACK)
        )
        assert dispatcher.maybe_auto_move(session.position)
        assert rules.best_move_calls == 1
        assert len(delivered) == 1
        assert session.side_to_move == Color.BLACK

    def test_asynchronous_request(self, rules: PythonChessRules) -> None:
        requests: list[tuple] = []
        white = AutomatedSide(
            Color.WHITE, on_request_move=lambda pos, rid: requests.append((pos, rid))
        )
        dispatcher, session, delivered = _make_dispatcher(
            rules, white, HumanSide(Color.BLACK)
        )
        assert dispatcher.maybe_auto_move(session.position)
        assert dispatcher.is_waiting
        assert len(requests) == 1

        pos, request_id = requests[0]
        new_position, move = rules.best_move(pos)
        assert dispatcher.accept(request_id, new_position, move)
        assert delivered == [move]
        assert not dispatcher.is_waiting

    def test_stale_result_is_dropped(self, rules: PythonChessRules) -> None:
        requests: list[int] = []
        white = AutomatedSide(
            Color.WHITE, on_request_move=lambda pos, rid: requests.append(rid)
        )
        dispatcher, session, delivered = _make_dispatcher(
            rules, white, HumanSide(Color.BLACK)
        )
        dispatcher.maybe_auto_move(session.position)
        new_position, move = rules.best_move(session.position)
        assert not dispatcher.accept(requests[0] + 1, new_position, move)
        assert delivered == []
        assert dispatcher.is_waiting

    def test_no_second_request_while_waiting(self, rules: PythonChessRules) -> None:
        requests: list[int] = []
        white = AutomatedSide(
            Color.WHITE, on_request_move=lambda pos, rid: requests.append(rid)
        )
        dispatcher, session, _ = _make_dispatcher(rules, white, HumanSide(Color.BLACK))
        dispatcher.maybe_auto_move(session.position)
        assert not dispatcher.maybe_auto_move(session.position)
        assert len(requests) == 1

    def test_cancel_notifies_side(self, rules: PythonChessRules) -> None:
        cancelled: list[bool] = []
        white = AutomatedSide(
            Color.WHITE,
            on_request_move=lambda pos, rid: None,
            on_cancel=lambda: cancelled.append(True),
        )
        dispatcher, session, _ = _make_dispatcher(rules, white, HumanSide(Color.BLACK))
        dispatcher.maybe_auto_move(session.position)
        dispatcher.cancel()
        assert cancelled == [True]
        assert not dispatcher.is_waiting
        dispatcher.cancel()
        assert cancelled == [True]
