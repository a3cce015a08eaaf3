"""GameController — the click-driven orchestrator of a chess game.

Coordinates: SelectionTracker, PromotionResolver, MoveExecutor,
GameEndEvaluator and TurnDispatcher over one SessionContext.
Emits events via simple callbacks so the board view / tests can subscribe.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chessclick.core.enums import Color, PieceType
from chessclick.core.errors import InvalidState
from chessclick.core.types import Square, is_valid_square
from chessclick.game.dispatcher import TurnDispatcher
from chessclick.game.evaluator import GameEndEvaluator
from chessclick.game.events import GameEvents
from chessclick.game.executor import MoveExecutor
from chessclick.game.interfaces import GamePhase, IBoardObserver, IPlayer
from chessclick.game.promotion import PromotionResolver
from chessclick.game.selection import Selection, SelectionTracker
from chessclick.game.session import SessionContext

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.core.outcome import GameOutcome
    from chessclick.core.piece import Piece
    from chessclick.engine.interfaces import IRulesEngine, Position

_LOGGER = logging.getLogger(__name__)


class GameController:
    """Turns board clicks into committed moves and drives the engine side.

    Thread-safety: every method must be called from a single thread (the
    main/UI thread).  Asynchronous engine results arrive through
    :meth:`deliver_automated_move`, which the Qt engine session invokes on
    the main thread via a queued signal.
    """

    __slots__ = (
        "_engine",
        "_session",
        "_tracker",
        "_evaluator",
        "_executor",
        "_resolver",
        "_dispatcher",
        "_last_phase",
        "events",
    )

    def __init__(self, engine: IRulesEngine) -> None:
        self._engine = engine
        self.events = GameEvents()
        self._session = SessionContext(engine.initial_position())
        self._tracker = SelectionTracker(self._session, engine, self.events)
        self._evaluator = GameEndEvaluator(engine)
        self._executor = MoveExecutor(
            self._session,
            engine,
            self.events,
            self._evaluator,
            self._tracker,
            after_install=self._after_install,
        )
        self._resolver = PromotionResolver(
            self._session, self.events, self._tracker, self._executor.commit
        )
        self._dispatcher = TurnDispatcher(
            self._session, engine, self._executor.install
        )
        self._last_phase = self._session.phase

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> IRulesEngine:
        return self._engine

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def position(self) -> Position:
        return self._session.position

    @property
    def selection(self) -> Selection | None:
        return self._session.selection

    @property
    def pending_promotion(self) -> tuple[Move, ...] | None:
        return self._session.pending_promotion

    @property
    def outcome(self) -> GameOutcome:
        return self._session.outcome

    @property
    def phase(self) -> GamePhase:
        return self._session.phase

    @property
    def current_player(self) -> IPlayer | None:
        return self._session.player_to_move

    def player(self, color: Color) -> IPlayer | None:
        return self._session.players.get(color)

    def attach(self, observer: IBoardObserver) -> None:
        """Subscribe a board view to every controller event."""
        self.events.subscribe(observer)

    # ── Projection helpers for the board view ────────────────────────────

    def piece_at(self, index: Square) -> Piece | None:
        return self._engine.square_contents(self._session.position, index)

    def pieces(self) -> dict[Square, Piece]:
        """Occupied squares of the current position."""
        board: dict[Square, Piece] = {}
        for sq in range(64):
            piece = self.piece_at(sq)
            if piece is not None:
                board[sq] = piece
        return board

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
    ) -> None:
        """Set up a new game from the initial layout or *fen*."""
        self._dispatcher.cancel()
        old_selection = self._session.selection
        had_promotion = self._session.pending_promotion is not None

        position = (
            self._engine.position_from_fen(fen)
            if fen is not None
            else self._engine.initial_position()
        )
        self._session.reset(position, {Color.WHITE: white, Color.BLACK: black})
        self._session.legal_moves = tuple(self._engine.legal_moves(position))

        if old_selection is not None:
            self.events.emit_selection_changed(old_selection, None)
        if had_promotion:
            self.events.emit_promotion_resolved()
        self._executor.refresh_check(force=True)

        self._session.outcome = self._evaluator.evaluate(
            position, self._session.legal_moves
        )
        _LOGGER.info("New game: %s vs %s", white.name, black.name)
        self._sync_phase(force=True)
        if self._session.outcome.is_over:
            self.events.emit_game_ended(self._session.outcome)
            return

        self._dispatcher.maybe_auto_move(position)
        self._sync_phase()

    # ── Click handling ───────────────────────────────────────────────────

    def select_square(self, index: Square) -> None:
        """Handle a click on square *index*.

        Clicks are dropped once the game is over or while the engine is
        thinking.  A click while a promotion choice is open cancels it.
        """
        if not is_valid_square(index):
            raise ValueError(f"Square index out of range: {index}")

        phase = self._session.phase
        if phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return
        if phase is GamePhase.AUTOMATED_TURN:
            _LOGGER.debug("Ignoring click on %d during engine turn", index)
            return
        if phase is GamePhase.PENDING_PROMOTION:
            self.cancel_promotion()
            return

        current = self._session.player_to_move
        if current is not None and not current.is_human:
            return

        try:
            candidates = self._tracker.select_square(index)
            if len(candidates) == 1:
                self._executor.commit(candidates[0])
            elif len(candidates) > 1:
                self._resolver.open(candidates)
        finally:
            self._sync_phase()

    def clear_selection(self) -> None:
        """Background click: drop the current selection."""
        if self._session.pending_promotion is not None:
            self.cancel_promotion()
            return
        self._tracker.clear()
        self._sync_phase()

    # ── Promotion ────────────────────────────────────────────────────────

    def choose_promotion(self, move: Move) -> None:
        self._require_human_turn()
        try:
            self._resolver.choose(move)
        finally:
            self._sync_phase()

    def choose_promotion_piece(self, piece_type: PieceType) -> None:
        self._require_human_turn()
        try:
            self._resolver.choose_piece(piece_type)
        finally:
            self._sync_phase()

    def cancel_promotion(self) -> None:
        try:
            self._resolver.cancel()
        finally:
            self._sync_phase()

    # ── Direct commits ───────────────────────────────────────────────────

    def commit(self, move: Move) -> None:
        """Commit an already resolved move (e.g. from a drag or a script)."""
        self._require_human_turn()
        try:
            self._executor.commit(move)
        finally:
            self._sync_phase()

    def deliver_automated_move(
        self, request_id: int, new_position: Position, move: Move
    ) -> bool:
        """Accept the result of an asynchronous engine request."""
        try:
            return self._dispatcher.accept(request_id, new_position, move)
        finally:
            self._sync_phase()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _require_human_turn(self) -> None:
        """Moves from outside the engine are refused while it is to move."""
        session = self._session
        if session.phase is GamePhase.AUTOMATED_TURN:
            raise InvalidState("The engine is choosing a move")
        current = session.player_to_move
        if current is not None and not current.is_human:
            raise InvalidState(f"{current.name} is to move")

    def _after_install(self) -> None:
        self._dispatcher.maybe_auto_move(self._session.position)

    def _sync_phase(self, *, force: bool = False) -> None:
        phase = self._session.phase
        if not force and phase == self._last_phase:
            return
        self._last_phase = phase
        self.events.emit_phase_changed(phase)
