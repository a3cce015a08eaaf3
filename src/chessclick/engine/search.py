"""Shared engine search models and a negamax searcher over python-chess boards."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from time import perf_counter

import chess

CancelCheck = Callable[[], bool]

_INF_SCORE = 1_000_000
_MATE_SCORE = 100_000
_QUIESCENCE_MAX_DEPTH = 8
_PROMOTION_BONUS = 10_000

_PIECE_VALUES: dict[chess.PieceType, int] = {
    chess.PAWN: 100,
    chess.KNIGHT: 320,
    chess.BISHOP: 330,
    chess.ROOK: 500,
    chess.QUEEN: 900,
    chess.KING: 0,
}


def _never_cancelled() -> bool:
    return False


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3
    time_limit_ms: int | None = 700


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: chess.Move | None
    score_cp: int
    depth: int
    nodes: int


class NegamaxSearcher:
    """Iterative-deepening alpha-beta search with a capture-only quiescence.

    Scores are centipawns from the side to move's point of view.
    """

    __slots__ = ("_cancel_check", "_deadline", "_nodes", "_stopped")

    def __init__(self) -> None:
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled
        self._stopped = False

    def search(
        self,
        board: chess.Board,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if limits.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")

        self._nodes = 0
        self._stopped = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        board = board.copy(stack=False)
        root_moves = self._order_moves(board, board.legal_moves)
        if not root_moves:
            if board.is_check():
                return SearchResult(None, -_MATE_SCORE, 0, self._nodes)
            return SearchResult(None, 0, 0, self._nodes)

        best_move = root_moves[0]
        best_score = self._evaluate(board)
        completed_depth = 0

        for depth in range(1, limits.max_depth + 1):
            if self._should_stop():
                break

            score, move = self._search_root(board, root_moves, depth)
            if self._should_stop() or move is None:
                break

            best_move = move
            best_score = score
            completed_depth = depth

            # Principal variation move first in the next iteration.
            root_moves = [move] + [m for m in root_moves if m != move]

        return SearchResult(best_move, best_score, completed_depth, self._nodes)

    # ── Search ───────────────────────────────────────────────────────────

    def _search_root(
        self,
        board: chess.Board,
        moves: list[chess.Move],
        depth: int,
    ) -> tuple[int, chess.Move | None]:
        alpha = -_INF_SCORE
        best_move: chess.Move | None = None
        for move in moves:
            board.push(move)
            score = -self._negamax(board, depth - 1, -_INF_SCORE, -alpha, ply=1)
            board.pop()
            if self._should_stop():
                return alpha, None
            if score > alpha:
                alpha = score
                best_move = move
        return alpha, best_move

    def _negamax(
        self,
        board: chess.Board,
        depth: int,
        alpha: int,
        beta: int,
        ply: int,
    ) -> int:
        self._nodes += 1
        if self._should_stop():
            return 0

        moves = self._order_moves(board, board.legal_moves)
        if not moves:
            return -_MATE_SCORE + ply if board.is_check() else 0
        if board.halfmove_clock >= 100 or board.is_insufficient_material():
            return 0
        if depth <= 0:
            return self._quiescence(board, alpha, beta, 0)

        best = -_INF_SCORE
        for move in moves:
            board.push(move)
            score = -self._negamax(board, depth - 1, -beta, -alpha, ply + 1)
            board.pop()
            if score > best:
                best = score
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break
        return best

    def _quiescence(self, board: chess.Board, alpha: int, beta: int, qply: int) -> int:
        self._nodes += 1
        stand_pat = self._evaluate(board)
        if stand_pat >= beta or qply >= _QUIESCENCE_MAX_DEPTH or self._should_stop():
            return stand_pat
        if stand_pat > alpha:
            alpha = stand_pat

        for move in self._order_moves(board, board.generate_legal_captures()):
            board.push(move)
            score = -self._quiescence(board, -beta, -alpha, qply + 1)
            board.pop()
            if score >= beta:
                return score
            if score > alpha:
                alpha = score
        return alpha

    # ── Heuristics ───────────────────────────────────────────────────────

    def _order_moves(
        self, board: chess.Board, moves: Iterable[chess.Move]
    ) -> list[chess.Move]:
        """Promotions first, then captures by MVV-LVA, then quiet moves."""

        def key(move: chess.Move) -> int:
            score = 0
            if move.promotion is not None:
                score += _PROMOTION_BONUS + _PIECE_VALUES[move.promotion]
            if board.is_capture(move):
                victim = board.piece_at(move.to_square)
                victim_value = _PIECE_VALUES[victim.piece_type] if victim else 100
                attacker = board.piece_at(move.from_square)
                attacker_value = _PIECE_VALUES[attacker.piece_type] if attacker else 0
                score += victim_value * 10 - attacker_value
            return -score

        return sorted(moves, key=key)

    @staticmethod
    def _evaluate(board: chess.Board) -> int:
        score = 0
        for piece_type, value in _PIECE_VALUES.items():
            white = len(board.pieces(piece_type, chess.WHITE))
            black = len(board.pieces(piece_type, chess.BLACK))
            score += value * (white - black)
        return score if board.turn == chess.WHITE else -score

    def _should_stop(self) -> bool:
        if self._stopped:
            return True
        if self._cancel_check() or (
            self._deadline is not None and perf_counter() >= self._deadline
        ):
            self._stopped = True
        return self._stopped
