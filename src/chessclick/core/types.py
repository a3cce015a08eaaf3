"""Square indices shared by the controller, the board view and python-chess.

A square is a plain ``int`` in ``[0, 64)``, rank-major from a1 = 0 to
h8 = 63, which is also python-chess's numbering.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int

FILES = "abcdefgh"
RANKS = "12345678"
BOARD_SQUARES = 64


def is_valid_square(sq: int) -> bool:
    return 0 <= sq < BOARD_SQUARES


def file_of(sq: Square) -> int:
    return sq % 8


def rank_of(sq: Square) -> int:
    return sq // 8


def make_square(file: int, rank: int) -> Square:
    return rank * 8 + file


def square_name(sq: Square) -> str:
    """Algebraic name of *sq*, e.g. ``28 -> 'e4'``."""
    return FILES[file_of(sq)] + RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`; raises ``ValueError`` on bad input."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(FILES.index(name[0]), RANKS.index(name[1]))


# Back-rank squares a castling king or rook starts on or lands on.
A1, C1, D1, E1, F1, G1, H1 = (parse_square(f + "1") for f in "acdefgh")
A8, C8, D8, E8, F8, G8, H8 = (parse_square(f + "8") for f in "acdefgh")
