"""Errors raised by the interaction controller and its rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessclick.core.move import Move


class ControllerError(Exception):
    """Base class for every controller failure."""


class IllegalMove(ControllerError):
    """The rules engine refused to apply a move."""

    def __init__(self, move: Move, reason: str = "") -> None:
        self.move = move
        message = f"Illegal move: {move}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class TurnViolation(ControllerError):
    """A commit was attempted for a piece whose side is not to move."""

    def __init__(self, move: Move) -> None:
        self.move = move
        super().__init__(f"Move {move} attempted out of turn")


class NotACandidate(ControllerError):
    """A promotion choice did not match any open candidate."""

    def __init__(self, move: Move) -> None:
        self.move = move
        super().__init__(f"Move {move} is not an open promotion candidate")


class InvalidState(ControllerError):
    """An operation was called in a controller state that forbids it."""
