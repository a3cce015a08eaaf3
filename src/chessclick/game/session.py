"""Session context — the single mutable record owned by the controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chessclick.core.outcome import ONGOING, GameOutcome
from chessclick.game.interfaces import GamePhase

if TYPE_CHECKING:
    from chessclick.core.enums import Color
    from chessclick.core.move import Move
    from chessclick.core.types import Square
    from chessclick.engine.interfaces import Position
    from chessclick.game.interfaces import IPlayer
    from chessclick.game.selection import Selection


@dataclass
class SessionContext:
    """Position, selection, pending promotion and outcome of one game.

    This is a pure data class — the controller's components read and
    replace its fields; the board view only reads it.
    """

    position: Position
    legal_moves: tuple[Move, ...] = ()
    players: dict[Color, IPlayer] = field(default_factory=dict)
    selection: Selection | None = None
    pending_promotion: tuple[Move, ...] | None = None
    outcome: GameOutcome = ONGOING
    check_square: Square | None = None
    last_move: Move | None = None
    pending_request: int | None = None
    ply_count: int = 0

    def reset(self, position: Position, players: dict[Color, IPlayer]) -> None:
        """Initialise (or reset) the session for a new game."""
        self.position = position
        self.legal_moves = ()
        self.players = dict(players)
        self.selection = None
        self.pending_promotion = None
        self.outcome = ONGOING
        self.check_square = None
        self.last_move = None
        self.pending_request = None
        self.ply_count = 0

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def player_to_move(self) -> IPlayer | None:
        return self.players.get(self.side_to_move)

    @property
    def is_game_over(self) -> bool:
        return self.outcome.is_over

    @property
    def phase(self) -> GamePhase:
        """Controller state derived from the session fields."""
        if not self.players:
            return GamePhase.NOT_STARTED
        if self.outcome.is_over:
            return GamePhase.GAME_OVER
        if self.pending_request is not None:
            return GamePhase.AUTOMATED_TURN
        if self.pending_promotion is not None:
            return GamePhase.PENDING_PROMOTION
        if self.selection is not None:
            return GamePhase.SELECTED
        return GamePhase.IDLE
