"""Promotion resolver — holds ambiguous moves until one is chosen."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from chessclick.core.errors import InvalidState, NotACandidate
from chessclick.core.move import Move

if TYPE_CHECKING:
    from chessclick.core.enums import PieceType
    from chessclick.game.events import GameEvents
    from chessclick.game.selection import SelectionTracker
    from chessclick.game.session import SessionContext


class PromotionResolver:
    """Waits for an explicit choice among moves that differ only by promotion.

    Assumes the rules engine lists one legal move per promotion piece for
    the same origin/destination pair.
    """

    __slots__ = ("_session", "_events", "_tracker", "_commit")

    def __init__(
        self,
        session: SessionContext,
        events: GameEvents,
        tracker: SelectionTracker,
        commit: Callable[[Move], None],
    ) -> None:
        self._session = session
        self._events = events
        self._tracker = tracker
        self._commit = commit

    @property
    def is_open(self) -> bool:
        return self._session.pending_promotion is not None

    @property
    def candidates(self) -> tuple[Move, ...]:
        return self._session.pending_promotion or ()

    def open(self, candidates: Sequence[Move]) -> None:
        if self._session.pending_promotion is not None:
            raise InvalidState("A promotion choice is already open")
        pending = tuple(candidates)
        if not pending:
            raise InvalidState("Promotion needs at least one candidate")
        first = pending[0]
        if any(
            m.origin != first.origin or m.destination != first.destination
            for m in pending
        ):
            raise InvalidState("Promotion candidates must share origin and destination")

        self._session.pending_promotion = pending
        self._events.emit_promotion_offered(pending)

    def choose(self, move: Move) -> None:
        """Commit *move*; the executor closes the resolver on success."""
        pending = self._session.pending_promotion
        if pending is None:
            raise InvalidState("No promotion choice is open")
        if move not in pending:
            raise NotACandidate(move)
        # Commit the engine's own instance of the move.
        self._commit(pending[pending.index(move)])

    def choose_piece(self, piece_type: PieceType) -> None:
        pending = self._session.pending_promotion
        if pending is None:
            raise InvalidState("No promotion choice is open")
        first = pending[0]
        self.choose(Move(first.origin, first.destination, promotion=piece_type))

    def cancel(self) -> None:
        """Discard the candidates without committing and deselect."""
        if self._session.pending_promotion is None:
            raise InvalidState("No promotion choice is open")
        self.close()
        self._tracker.clear()

    def close(self) -> None:
        if self._session.pending_promotion is None:
            return
        self._session.pending_promotion = None
        self._events.emit_promotion_resolved()
