"""User-configurable application settings."""

from __future__ import annotations

from dataclasses import dataclass

from chessclick.core.enums import Color

OPPONENTS = ("engine", "human")
BOARD_THEMES = ("Classic", "Blue", "Green")


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Game
    opponent: str = "engine"  # one of OPPONENTS
    human_color: Color = Color.WHITE

    # Board
    board_theme: str = "Classic"
    show_legal_moves: bool = True

    # Engine
    engine_depth: int = 3
    engine_time_ms: int = 700

    # Diagnostics
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.opponent not in OPPONENTS:
            raise ValueError(f"Unknown opponent: {self.opponent!r}")
        if self.board_theme not in BOARD_THEMES:
            raise ValueError(f"Unknown board theme: {self.board_theme!r}")
        if self.engine_depth < 1:
            raise ValueError("Engine depth must be >= 1")
        if self.engine_time_ms < 1:
            raise ValueError("Engine time limit must be >= 1 ms")

    @property
    def vs_engine(self) -> bool:
        return self.opponent == "engine"
