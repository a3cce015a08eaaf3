"""Move executor — commits fully resolved moves to the session."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from chessclick.core.errors import IllegalMove, InvalidState, TurnViolation
from chessclick.core.types import (
    A1,
    A8,
    C1,
    C8,
    D1,
    D8,
    F1,
    F8,
    G1,
    G8,
    H1,
    H8,
    Square,
)

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.engine.interfaces import IRulesEngine, Position
    from chessclick.game.evaluator import GameEndEvaluator
    from chessclick.game.events import GameEvents
    from chessclick.game.selection import SelectionTracker
    from chessclick.game.session import SessionContext

_LOGGER = logging.getLogger(__name__)

# King destination → (rook origin, rook destination)
ROOK_RELOCATIONS: dict[Square, tuple[Square, Square]] = {
    C1: (A1, D1),
    G1: (H1, F1),
    C8: (A8, D8),
    G8: (H8, F8),
}


def rook_relocation(move: Move) -> tuple[Square, Square] | None:
    """Rook squares moved alongside a castling king, or ``None``."""
    if not move.is_castle:
        return None
    return ROOK_RELOCATIONS.get(move.destination)


class MoveExecutor:
    """Applies one move and runs everything that follows a commit.

    Args:
        after_install: Called once the new position, events and outcome
            are in place; the controller uses it to hand over to the
            turn dispatcher.
    """

    __slots__ = (
        "_session",
        "_engine",
        "_events",
        "_evaluator",
        "_tracker",
        "_after_install",
    )

    def __init__(
        self,
        session: SessionContext,
        engine: IRulesEngine,
        events: GameEvents,
        evaluator: GameEndEvaluator,
        tracker: SelectionTracker,
        after_install: Callable[[], None] | None = None,
    ) -> None:
        self._session = session
        self._engine = engine
        self._events = events
        self._evaluator = evaluator
        self._tracker = tracker
        self._after_install = after_install

    def commit(self, move: Move) -> None:
        """Commit *move* for the side to move.

        Raises:
            InvalidState: The game is already over.
            TurnViolation: The origin piece does not belong to the side to
                move; nothing changes.
            IllegalMove: The rules engine rejected the move; nothing
                changes and the boundary is notified through ``on_error``.
        """
        session = self._session
        if session.is_game_over:
            raise InvalidState("The game is over")

        owner = self._engine.square_contents(session.position, move.origin)
        if owner is None or owner.color != session.side_to_move:
            _LOGGER.warning(
                "Ignoring %s: %s is to move", move, session.side_to_move
            )
            raise TurnViolation(move)

        try:
            new_position = self._engine.apply_move(session.position, move)
        except IllegalMove as exc:
            _LOGGER.warning("Rules engine rejected %s: %s", move, exc)
            self._events.emit_error(exc)
            raise

        self.install(new_position, move)

    def install(self, new_position: Position, move: Move) -> None:
        """Adopt an authoritative *new_position* reached by *move*.

        Skips the turn-ownership guard; the automated path uses this
        directly with the engine's own result.  Any engine request still
        outstanding is abandoned.
        """
        session = self._session
        if session.pending_request is not None:
            # The search was started for the position being replaced.
            _LOGGER.debug("Abandoning engine request %d", session.pending_request)
            session.pending_request = None
            side = session.player_to_move
            if side is not None:
                side.cancel()

        session.position = new_position
        session.legal_moves = tuple(self._engine.legal_moves(new_position))
        session.last_move = move
        session.ply_count += 1

        self._tracker.clear()
        if session.pending_promotion is not None:
            session.pending_promotion = None
            self._events.emit_promotion_resolved()

        _LOGGER.debug("Committed %s (ply %d)", move, session.ply_count)
        self._events.emit_move_committed(move)
        self.refresh_check()

        session.outcome = self._evaluator.evaluate(new_position, session.legal_moves)
        if session.outcome.is_over:
            _LOGGER.info("Game over: %s", session.outcome)
            self._events.emit_game_ended(session.outcome)

        if self._after_install is not None:
            self._after_install()

    def refresh_check(self, *, force: bool = False) -> None:
        """Publish the checked king's square when it changes."""
        status = self._engine.check_status(self._session.position)
        king_square = status.king_square if status.in_check else None
        if not force and king_square == self._session.check_square:
            return
        self._session.check_square = king_square
        self._events.emit_check_changed(king_square)
