"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessclick.core.enums import Color, PieceType

_FEN_CHARS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}

# White glyphs start at U+2654 (king); black glyphs are offset by six.
_UNICODE_KING = 0x2654
_UNICODE_ORDER: dict[PieceType, int] = {
    PieceType.KING: 0,
    PieceType.QUEEN: 1,
    PieceType.ROOK: 2,
    PieceType.BISHOP: 3,
    PieceType.KNIGHT: 4,
    PieceType.PAWN: 5,
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Occupant of a square: a side and a piece kind."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        char = _FEN_CHARS[self.piece_type]
        return char.upper() if self.color == Color.WHITE else char

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        offset = _UNICODE_ORDER[self.piece_type] + (6 if self.color == Color.BLACK else 0)
        return chr(_UNICODE_KING + offset)
