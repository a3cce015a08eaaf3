"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessclick.core.enums import PieceType
from chessclick.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Two moves are equal when origin, destination and promotion piece match;
    the castle flag is descriptive only.
    """

    origin: Square
    destination: Square
    is_castle: bool = field(default=False, compare=False)
    promotion: PieceType | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.origin)}{square_name(self.destination)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
