"""Game outcome variants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from chessclick.core.enums import Color, DrawReason


@dataclass(frozen=True, slots=True)
class Ongoing:
    """The game continues."""

    @property
    def is_over(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Win:
    """*winner* delivered mate; the side to move is the loser."""

    winner: Color

    @property
    def loser(self) -> Color:
        return self.winner.opposite

    @property
    def is_over(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.winner} wins"


@dataclass(frozen=True, slots=True)
class Draw:
    reason: DrawReason

    @property
    def is_over(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"draw ({self.reason.value})"


GameOutcome: TypeAlias = Ongoing | Win | Draw

ONGOING = Ongoing()
