"""Tests for BoardScene rendering and click forwarding."""

from __future__ import annotations

from PyQt6.QtTest import QSignalSpy

from chessclick.core.enums import Color, PieceType
from chessclick.core.move import Move
from chessclick.core.piece import Piece
from chessclick.core.types import parse_square
from chessclick.engine.rules import PythonChessRules
from chessclick.game.controller import GameController
from chessclick.game.player import HumanSide
from chessclick.ui.board_scene import BoardScene


def _sq(name: str) -> int:
    return parse_square(name)


def _make_scene(
    rules: PythonChessRules, fen: str | None = None
) -> tuple[BoardScene, GameController]:
    controller = GameController(rules)
    controller.new_game(HumanSide(Color.WHITE), HumanSide(Color.BLACK), fen)
    scene = BoardScene()
    scene.bind(controller)
    return scene, controller


def _click(scene: BoardScene, *names: str) -> None:
    for name in names:
        scene.click_square(_sq(name))


def test_pos_to_square_respects_orientation() -> None:
    scene = BoardScene()
    scene.set_flipped(False)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == _sq("a8")

    scene.set_flipped(True)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == _sq("h1")


def test_bind_draws_initial_pieces(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    assert len(scene._piece_at) == 32
    assert scene._piece_at[_sq("e1")] == Piece(Color.WHITE, PieceType.KING)


def test_selection_highlights(rules: PythonChessRules) -> None:
    scene, controller = _make_scene(rules)
    _click(scene, "e2")
    assert controller.selection is not None
    assert scene._selected_item is not None
    assert set(scene._reachable_items) == {_sq("e3"), _sq("e4")}

    scene.click_square(None)
    assert controller.selection is None
    assert scene._selected_item is None
    assert scene._reachable_items == {}


def test_hidden_legal_moves_keep_selection_mark(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    _click(scene, "g1")
    scene.set_show_legal_moves(False)
    assert scene._selected_item is not None
    assert scene._reachable_items == {}


def test_move_relocates_piece(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    _click(scene, "e2", "e4")
    assert scene._piece_at[_sq("e4")] == Piece(Color.WHITE, PieceType.PAWN)
    assert _sq("e2") not in scene._piece_at
    assert len(scene._last_move_items) == 2
    assert scene._selected_item is None


def test_capture_removes_piece(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    _click(scene, "e2", "e4", "d7", "d5", "e4", "d5")
    assert len(scene._piece_at) == 31
    assert scene._piece_at[_sq("d5")] == Piece(Color.WHITE, PieceType.PAWN)


def test_castle_moves_rook(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules, "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    _click(scene, "e1", "g1")
    assert scene._piece_at[_sq("f1")] == Piece(Color.WHITE, PieceType.ROOK)
    assert scene._piece_at[_sq("g1")] == Piece(Color.WHITE, PieceType.KING)
    assert _sq("h1") not in scene._piece_at
    assert _sq("e1") not in scene._piece_at


def test_en_passant_removes_captured_pawn(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules, "4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
    _click(scene, "e5", "d6")
    assert scene._piece_at[_sq("d6")] == Piece(Color.WHITE, PieceType.PAWN)
    assert _sq("d5") not in scene._piece_at


def test_promotion_uses_chooser(qapp, rules: PythonChessRules) -> None:
    scene, controller = _make_scene(rules, "1k6/P7/8/8/8/8/8/K7 w - - 0 1")
    asked: list[tuple] = []

    def chooser(candidates, color, _parent):
        asked.append((len(candidates), color))
        return next(m for m in candidates if m.promotion is PieceType.KNIGHT)

    scene.set_promotion_chooser(chooser)
    _click(scene, "a7", "a8")
    assert controller.pending_promotion is not None
    qapp.processEvents()

    assert asked == [(4, Color.WHITE)]
    assert controller.pending_promotion is None
    assert scene._piece_at[_sq("a8")] == Piece(Color.WHITE, PieceType.KNIGHT)


def test_promotion_chooser_cancel(qapp, rules: PythonChessRules) -> None:
    scene, controller = _make_scene(rules, "1k6/P7/8/8/8/8/8/K7 w - - 0 1")
    scene.set_promotion_chooser(lambda _c, _color, _parent: None)
    _click(scene, "a7", "a8")
    qapp.processEvents()

    assert controller.pending_promotion is None
    assert controller.selection is None
    assert scene._piece_at[_sq("a7")] == Piece(Color.WHITE, PieceType.PAWN)


def test_rejected_choice_raises_error_signal(qapp, rules: PythonChessRules) -> None:
    scene, controller = _make_scene(rules, "1k6/P7/8/8/8/8/8/K7 w - - 0 1")
    spy = QSignalSpy(scene.error_raised)
    scene.set_promotion_chooser(
        lambda _c, _color, _parent: Move(_sq("a7"), _sq("a8"))
    )
    _click(scene, "a7", "a8")
    qapp.processEvents()

    assert len(spy) == 1
    assert controller.pending_promotion is not None


def test_check_highlight(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    assert scene._check_item is None
    _click(scene, "f2", "f3", "e7", "e5", "g2", "g4", "d8", "h4")
    assert scene._check_item is not None


def test_flip_keeps_pieces(rules: PythonChessRules) -> None:
    scene, _ = _make_scene(rules)
    _click(scene, "e2", "e4")
    scene.set_flipped(True)
    assert scene.is_flipped()
    assert len(scene._piece_at) == 32
    assert len(scene._last_move_items) == 2
