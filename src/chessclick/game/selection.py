"""Selection tracker — turns square clicks into a selected origin."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from chessclick.core.types import Square, is_valid_square

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.engine.interfaces import IRulesEngine
    from chessclick.game.events import GameEvents
    from chessclick.game.session import SessionContext


@dataclass(frozen=True, slots=True)
class Selection:
    """A selected origin and the squares its piece can legally reach."""

    origin: Square
    destinations: frozenset[Square]


def destinations_from(legal_moves: Iterable[Move], origin: Square) -> frozenset[Square]:
    """Distinct destinations of the legal moves starting at *origin*."""
    return frozenset(m.destination for m in legal_moves if m.origin == origin)


def moves_between(
    legal_moves: Iterable[Move], origin: Square, destination: Square
) -> tuple[Move, ...]:
    """Legal moves from *origin* to *destination*, in engine order."""
    return tuple(
        m for m in legal_moves if m.origin == origin and m.destination == destination
    )


class SelectionTracker:
    """Maintains ``None`` or ``Selection(origin, destinations)``.

    The destination set is always rebuilt from the session's current legal
    moves, never patched.
    """

    __slots__ = ("_session", "_engine", "_events")

    def __init__(
        self,
        session: SessionContext,
        engine: IRulesEngine,
        events: GameEvents,
    ) -> None:
        self._session = session
        self._engine = engine
        self._events = events

    def select_square(self, index: Square) -> tuple[Move, ...]:
        """Apply a click on *index*.

        Returns the legal moves matching ``selection.origin → index`` when
        the click targets a reachable destination; the selection is left in
        place for the caller to resolve.  Otherwise the selection is updated
        and an empty tuple is returned.
        """
        if not is_valid_square(index):
            raise ValueError(f"Square index out of range: {index}")

        current = self._session.selection
        if current is not None:
            if index in current.destinations:
                return moves_between(self._session.legal_moves, current.origin, index)
            if index == current.origin:
                self.clear()
                return ()

        piece = self._engine.square_contents(self._session.position, index)
        if piece is None or piece.color != self._session.side_to_move:
            self.clear()
            return ()

        self._replace(
            Selection(index, destinations_from(self._session.legal_moves, index))
        )
        return ()

    def clear(self) -> None:
        """Drop the selection (background click, completed move, cancel)."""
        self._replace(None)

    def _replace(self, new: Selection | None) -> None:
        old = self._session.selection
        if old == new:
            return
        self._session.selection = new
        self._events.emit_selection_changed(old, new)
