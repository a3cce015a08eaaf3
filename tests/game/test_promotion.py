"""Tests for the promotion resolver."""

import pytest

from chessclick.core.enums import PieceType
from chessclick.core.errors import InvalidState, NotACandidate
from chessclick.core.move import Move
from chessclick.core.types import parse_square
from chessclick.engine.rules import PythonChessRules
from chessclick.game.events import GameEvents
from chessclick.game.promotion import PromotionResolver
from chessclick.game.selection import SelectionTracker, moves_between
from chessclick.game.session import SessionContext

A7 = parse_square("a7")
A8 = parse_square("a8")


def _make_resolver(
    rules: PythonChessRules,
) -> tuple[PromotionResolver, SessionContext, list[Move], list[str]]:
    pos = rules.position_from_fen("1k6/P7/8/8/8/8/8/K7 w - - 0 1")
    session = SessionContext(pos, tuple(rules.legal_moves(pos)))
    events = GameEvents()
    log: list[str] = []
    events.on_promotion_offered.append(lambda c: log.append(f"offered:{len(c)}"))
    events.on_promotion_resolved.append(lambda: log.append("resolved"))
    tracker = SelectionTracker(session, rules, events)
    committed: list[Move] = []
    return PromotionResolver(session, events, tracker, committed.append), session, committed, log


def _candidates(session: SessionContext) -> tuple[Move, ...]:
    return moves_between(session.legal_moves, A7, A8)


class TestPromotionResolver:
    def test_open_offers_candidates(self, rules: PythonChessRules) -> None:
        resolver, session, _, log = _make_resolver(rules)
        resolver.open(_candidates(session))
        assert resolver.is_open
        assert len(resolver.candidates) == 4
        assert log == ["offered:4"]

    def test_open_twice(self, rules: PythonChessRules) -> None:
        resolver, session, _, _ = _make_resolver(rules)
        resolver.open(_candidates(session))
        with pytest.raises(InvalidState):
            resolver.open(_candidates(session))

    def test_open_rejects_empty(self, rules: PythonChessRules) -> None:
        resolver, _, _, _ = _make_resolver(rules)
        with pytest.raises(InvalidState):
            resolver.open(())

    def test_open_rejects_mixed_pairs(self, rules: PythonChessRules) -> None:
        resolver, _, _, _ = _make_resolver(rules)
        with pytest.raises(InvalidState):
            resolver.open(
                (
                    Move(A7, A8, promotion=PieceType.QUEEN),
                    Move(parse_square("a1"), parse_square("a2")),
                )
            )

    def test_choose_commits(self, rules: PythonChessRules) -> None:
        resolver, session, committed, _ = _make_resolver(rules)
        resolver.open(_candidates(session))
        rook = Move(A7, A8, promotion=PieceType.ROOK)
        resolver.choose(rook)
        assert committed == [rook]

    def test_choose_piece(self, rules: PythonChessRules) -> None:
        resolver, session, committed, _ = _make_resolver(rules)
        resolver.open(_candidates(session))
        resolver.choose_piece(PieceType.KNIGHT)
        assert committed[0].promotion is PieceType.KNIGHT

    def test_choose_non_candidate(self, rules: PythonChessRules) -> None:
        resolver, session, committed, _ = _make_resolver(rules)
        resolver.open(_candidates(session))
        with pytest.raises(NotACandidate):
            resolver.choose(Move(A7, A8))
        assert committed == []
        assert resolver.is_open

    def test_choose_without_open(self, rules: PythonChessRules) -> None:
        resolver, _, _, _ = _make_resolver(rules)
        with pytest.raises(InvalidState):
            resolver.choose(Move(A7, A8, promotion=PieceType.QUEEN))
        with pytest.raises(InvalidState):
            resolver.choose_piece(PieceType.QUEEN)

    def test_cancel(self, rules: PythonChessRules) -> None:
        resolver, session, committed, log = _make_resolver(rules)
        resolver.open(_candidates(session))
        resolver.cancel()
        assert not resolver.is_open
        assert session.selection is None
        assert committed == []
        assert log == ["offered:4", "resolved"]

    def test_cancel_without_open(self, rules: PythonChessRules) -> None:
        resolver, _, _, _ = _make_resolver(rules)
        with pytest.raises(InvalidState):
            resolver.cancel()
