"""Turn dispatcher — plays the automated side's moves."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from chessclick.core.enums import SideKind
from chessclick.game.player import AutomatedSide

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.engine.interfaces import IRulesEngine, Position
    from chessclick.game.session import SessionContext

_LOGGER = logging.getLogger(__name__)

DeliverCallback = Callable[["Position", "Move"], None]


class TurnDispatcher:
    """Requests a best move whenever the automated side is to move.

    Engine results are authoritative: they go straight to *deliver*
    (the executor's install path) without the turn-ownership guard.

    Synchronous sides are searched inline.  Asynchronous sides receive a
    request id; only a matching :meth:`accept` call is honoured, so a late
    result for an abandoned request is dropped.
    """

    __slots__ = ("_session", "_engine", "_deliver", "_request_id", "_busy", "_again")

    def __init__(
        self,
        session: SessionContext,
        engine: IRulesEngine,
        deliver: DeliverCallback,
    ) -> None:
        self._session = session
        self._engine = engine
        self._deliver = deliver
        self._request_id = 0
        self._busy = False
        self._again = False

    @property
    def is_waiting(self) -> bool:
        return self._session.pending_request is not None

    def maybe_auto_move(self, position: Position) -> bool:
        """Play or request the automated move for *position*.

        Returns ``True`` when a move was played or a request was issued.
        """
        if self._busy:
            # Re-entered from our own delivery: let the running loop continue.
            self._again = True
            return False

        self._busy = True
        dispatched = False
        try:
            while True:
                self._again = False
                if not self._dispatch_once(position):
                    break
                dispatched = True
                if not self._again:
                    break
                position = self._session.position
        finally:
            self._busy = False
        return dispatched

    def accept(self, request_id: int, new_position: Position, move: Move) -> bool:
        """Deliver an asynchronous search result."""
        session = self._session
        if session.is_game_over or request_id != session.pending_request:
            _LOGGER.debug("Dropping stale engine result %s (request %d)", move, request_id)
            return False
        session.pending_request = None
        self._deliver(new_position, move)
        return True

    def cancel(self) -> None:
        """Abandon an outstanding asynchronous request, if any."""
        session = self._session
        if session.pending_request is None:
            return
        session.pending_request = None
        side = session.player_to_move
        if side is not None:
            side.cancel()

    def _dispatch_once(self, position: Position) -> bool:
        session = self._session
        if session.is_game_over or session.pending_request is not None:
            return False
        side = session.players.get(position.side_to_move)
        if side is None or side.kind is SideKind.HUMAN:
            return False

        if isinstance(side, AutomatedSide) and side.is_asynchronous:
            self._request_id += 1
            session.pending_request = self._request_id
            _LOGGER.debug("Requesting engine move (request %d)", self._request_id)
            side.request_move(position, self._request_id)
            return True

        new_position, move = self._engine.best_move(position)
        self._deliver(new_position, move)
        return True
