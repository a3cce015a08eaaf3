"""Rules engine backed by the python-chess library."""

from __future__ import annotations

from collections.abc import Sequence

import chess

from chessclick.core.enums import Color, PieceType
from chessclick.core.errors import IllegalMove, InvalidState
from chessclick.core.move import Move
from chessclick.core.piece import Piece
from chessclick.core.types import Square, is_valid_square
from chessclick.engine.interfaces import CheckStatus, IRulesEngine
from chessclick.engine.search import (
    CancelCheck,
    NegamaxSearcher,
    SearchLimits,
    SearchResult,
)


class BoardPosition:
    """Immutable snapshot wrapping a private ``chess.Board``.

    The wrapped board is never handed out; callers needing to explore
    variations get a copy from :meth:`board`.
    """

    __slots__ = ("_board", "_fen")

    def __init__(self, board: chess.Board) -> None:
        self._board = board
        self._fen = board.fen()

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self._board.turn == chess.WHITE else Color.BLACK

    @property
    def halfmove_clock(self) -> int:
        return self._board.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._board.fullmove_number

    @property
    def fen(self) -> str:
        return self._fen

    def board(self) -> chess.Board:
        """Return a mutable copy of the underlying board."""
        return self._board.copy(stack=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardPosition):
            return NotImplemented
        return self._fen == other._fen

    def __hash__(self) -> int:
        return hash(self._fen)

    def __repr__(self) -> str:
        return f"BoardPosition({self._fen!r})"


def _to_move(board: chess.Board, move: chess.Move) -> Move:
    promotion = PieceType(move.promotion) if move.promotion is not None else None
    return Move(
        move.from_square,
        move.to_square,
        is_castle=board.is_castling(move),
        promotion=promotion,
    )


def _to_chess_move(move: Move) -> chess.Move:
    promotion = int(move.promotion) if move.promotion is not None else None
    return chess.Move(move.origin, move.destination, promotion=promotion)


def _unwrap(position: object) -> BoardPosition:
    if not isinstance(position, BoardPosition):
        raise TypeError(f"Expected BoardPosition, got {type(position).__name__}")
    return position


class PythonChessRules(IRulesEngine):
    """Standard chess rules via python-chess plus a built-in negamax search.

    Args:
        limits: Limits applied to every :meth:`best_move` query.
    """

    __slots__ = ("_limits", "_searcher")

    def __init__(self, limits: SearchLimits | None = None) -> None:
        self._limits = limits or SearchLimits()
        self._searcher = NegamaxSearcher()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    def set_limits(self, limits: SearchLimits) -> None:
        """Replace search limits (takes effect on the next search)."""
        self._limits = limits

    # ── IRulesEngine impl ────────────────────────────────────────────────

    def initial_position(self) -> BoardPosition:
        return BoardPosition(chess.Board())

    def position_from_fen(self, fen: str) -> BoardPosition:
        return BoardPosition(chess.Board(fen))

    def legal_moves(self, position: object) -> Sequence[Move]:
        board = _unwrap(position)._board
        return tuple(_to_move(board, m) for m in board.legal_moves)

    def apply_move(self, position: object, move: Move) -> BoardPosition:
        board = _unwrap(position).board()
        chess_move = _to_chess_move(move)
        if not board.is_legal(chess_move):
            raise IllegalMove(move, f"not legal in {board.fen()}")
        board.push(chess_move)
        return BoardPosition(board)

    def check_status(self, position: object) -> CheckStatus:
        board = _unwrap(position)._board
        return CheckStatus(board.is_check(), board.king(board.turn))

    def best_move(
        self,
        position: object,
        is_cancelled: CancelCheck | None = None,
    ) -> tuple[BoardPosition, Move]:
        current = _unwrap(position)
        result = self.search(current, is_cancelled)
        if result.best_move is None:
            raise InvalidState(f"No move available in {current.fen}")
        board = current.board()
        move = _to_move(board, result.best_move)
        board.push(result.best_move)
        return BoardPosition(board), move

    def square_contents(self, position: object, index: Square) -> Piece | None:
        if not is_valid_square(index):
            raise ValueError(f"Square index out of range: {index}")
        piece = _unwrap(position)._board.piece_at(index)
        if piece is None:
            return None
        color = Color.WHITE if piece.color == chess.WHITE else Color.BLACK
        return Piece(color, PieceType(piece.piece_type))

    # ── Search ───────────────────────────────────────────────────────────

    def search(
        self,
        position: BoardPosition,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        """Run the raw search, returning score and depth alongside the move."""
        return self._searcher.search(position._board, self._limits, is_cancelled)
