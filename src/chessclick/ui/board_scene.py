"""BoardScene — QGraphicsScene that renders a controller's session."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QPointF, Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
    QWidget,
)

from chessclick.core.enums import Color
from chessclick.core.errors import ControllerError
from chessclick.core.piece import Piece
from chessclick.core.types import Square, file_of, make_square, rank_of
from chessclick.game.executor import rook_relocation
from chessclick.ui.promotion_dialog import PromotionDialog
from chessclick.ui.theme import BoardTheme

if TYPE_CHECKING:
    from chessclick.core.move import Move
    from chessclick.game.controller import GameController
    from chessclick.game.selection import Selection

PromotionChooser = Callable[[tuple["Move", ...], Color, "QWidget | None"], "Move | None"]


class BoardScene(QGraphicsScene):
    """Draws squares, pieces and highlights; forwards clicks to the controller.

    The scene only reads controller state.  Every change arrives through
    the controller's events.

    Signals:
        error_raised(str): A click was rejected by the controller.
    """

    error_raised = pyqtSignal(str)

    TILE = 80  # px per square

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._controller: GameController | None = None
        self._flipped = False
        self._show_legal_moves = True
        self._promotion_chooser: PromotionChooser = PromotionDialog.ask

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}
        self._piece_at: dict[Square, Piece] = {}
        self._selected_item: QGraphicsRectItem | None = None
        self._reachable_items: dict[Square, QGraphicsRectItem] = {}
        self._check_item: QGraphicsRectItem | None = None
        self._last_move_items: list[QGraphicsRectItem] = []

        self._draw_board()

    # ── Public API ───────────────────────────────────────────────────────

    def bind(self, controller: GameController) -> None:
        """Render *controller* and follow its events."""
        self._controller = controller
        events = controller.events
        events.on_selection_changed.append(self._on_selection_changed)
        events.on_move_committed.append(self._on_move_committed)
        events.on_promotion_offered.append(self._on_promotion_offered)
        events.on_check_changed.append(self._on_check_changed)
        self.sync_from_controller()

    def sync_from_controller(self) -> None:
        """Full redraw from the controller's current session."""
        self._clear_selection_marks()
        self._clear_last_move()
        if self._controller is None:
            return
        session = self._controller.session
        self._sync_pieces(self._controller.pieces())
        self._on_selection_changed(None, session.selection)
        self._on_check_changed(session.check_square)
        if session.last_move is not None:
            self._highlight_last_move(session.last_move)

    def click_square(self, sq: Square | None) -> None:
        """Forward a click on *sq* (``None`` = outside the board)."""
        if self._controller is None:
            return
        try:
            if sq is None:
                self._controller.clear_selection()
            else:
                self._controller.select_square(sq)
        except ControllerError as exc:
            self.error_raised.emit(str(exc))

    def set_promotion_chooser(self, chooser: PromotionChooser) -> None:
        self._promotion_chooser = chooser

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        self.sync_from_controller()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.sync_from_controller()

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide reachable-square highlights."""
        self._show_legal_moves = visible
        if self._controller is not None:
            selection = self._controller.selection
            self._on_selection_changed(selection, selection)

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_selection_changed(
        self, _old: Selection | None, new: Selection | None
    ) -> None:
        self._clear_selection_marks()
        if new is None:
            return
        self._selected_item = self._make_highlight(new.origin, self._theme.selected)
        if self._show_legal_moves:
            for sq in sorted(new.destinations):
                self._reachable_items[sq] = self._make_highlight(
                    sq, self._theme.reachable
                )

    def _on_move_committed(self, move: Move) -> None:
        self._relocate(move.origin, move.destination)
        relocation = rook_relocation(move)
        if relocation is not None:
            self._relocate(*relocation)
        # Promotions and en passant captures are fixed up from the position.
        if self._controller is not None:
            self._reconcile(self._controller.pieces())
        self._highlight_last_move(move)

    def _on_promotion_offered(self, candidates: tuple[Move, ...]) -> None:
        # Ask once the click handler that opened the choice has returned.
        QTimer.singleShot(0, lambda: self._ask_promotion(candidates))

    def _on_check_changed(self, king_square: Square | None) -> None:
        if self._check_item is not None:
            self.removeItem(self._check_item)
            self._check_item = None
        if king_square is not None:
            self._check_item = self._make_highlight(king_square, self._theme.check)
            self._check_item.setZValue(0.6)

    # ── Promotion ────────────────────────────────────────────────────────

    def _ask_promotion(self, candidates: tuple[Move, ...]) -> None:
        controller = self._controller
        if controller is None or controller.pending_promotion != candidates:
            return
        parent = self.views()[0] if self.views() else None
        chosen = self._promotion_chooser(
            candidates, controller.session.side_to_move, parent
        )
        try:
            if chosen is None:
                controller.cancel_promotion()
            else:
                controller.choose_promotion(chosen)
        except ControllerError as exc:
            self.error_raised.emit(str(exc))

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()

        t = self.TILE
        for sq in range(64):
            f, r = file_of(sq), rank_of(sq)
            vf, vr = self._visual_coords(f, r)
            is_dark = (f + r) % 2 == 0
            color = self._theme.dark_square if is_dark else self._theme.light_square
            rect = QGraphicsRectItem(vf * t, vr * t, t, t)
            rect.setBrush(QBrush(color))
            rect.setPen(QPen(Qt.PenStyle.NoPen))
            rect.setZValue(0)
            self.addItem(rect)
            self._square_items[sq] = rect

        self.setSceneRect(0, 0, 8 * t, 8 * t)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self, pieces: dict[Square, Piece]) -> None:
        """Re-create all piece items."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()
        self._piece_at.clear()
        for sq, piece in pieces.items():
            self._place(sq, piece)

    def _reconcile(self, pieces: dict[Square, Piece]) -> None:
        """Fix squares whose displayed piece differs from *pieces*."""
        for sq in set(self._piece_at) | set(pieces):
            expected = pieces.get(sq)
            if self._piece_at.get(sq) == expected:
                continue
            self._remove_piece(sq)
            if expected is not None:
                self._place(sq, expected)

    def _relocate(self, from_sq: Square, to_sq: Square) -> None:
        item = self._piece_items.pop(from_sq, None)
        piece = self._piece_at.pop(from_sq, None)
        if item is None or piece is None:
            return
        self._remove_piece(to_sq)
        self._piece_items[to_sq] = item
        self._piece_at[to_sq] = piece
        self._position_item(item, to_sq)

    def _place(self, sq: Square, piece: Piece) -> None:
        # Solid glyphs for both sides, tinted per colour.
        glyph = Piece(Color.BLACK, piece.piece_type).symbol
        item = QGraphicsSimpleTextItem(glyph)
        item.setFont(QFont("DejaVu Sans", int(self.TILE * 0.6)))
        fill = (
            self._theme.piece_white
            if piece.color == Color.WHITE
            else self._theme.piece_black
        )
        item.setBrush(QBrush(fill))
        item.setPen(QPen(QColor(0, 0, 0), 1.2))
        item.setZValue(1)
        self.addItem(item)
        self._position_item(item, sq)
        self._piece_items[sq] = item
        self._piece_at[sq] = piece

    def _remove_piece(self, sq: Square) -> None:
        item = self._piece_items.pop(sq, None)
        self._piece_at.pop(sq, None)
        if item is not None:
            self.removeItem(item)

    def _position_item(self, item: QGraphicsSimpleTextItem, sq: Square) -> None:
        t = self.TILE
        vf, vr = self._visual_coords(file_of(sq), rank_of(sq))
        bounds = item.boundingRect()
        item.setPos(
            vf * t + (t - bounds.width()) / 2,
            vr * t + (t - bounds.height()) / 2,
        )

    # ── Highlights ───────────────────────────────────────────────────────

    def _highlight_last_move(self, move: Move) -> None:
        self._clear_last_move()
        for sq in (move.origin, move.destination):
            rect = self._make_highlight(sq, self._theme.last_move)
            rect.setZValue(0.5)
            self._last_move_items.append(rect)

    def _clear_selection_marks(self) -> None:
        if self._selected_item is not None:
            self.removeItem(self._selected_item)
            self._selected_item = None
        for item in self._reachable_items.values():
            self.removeItem(item)
        self._reachable_items.clear()

    def _clear_last_move(self) -> None:
        for item in self._last_move_items:
            self.removeItem(item)
        self._last_move_items.clear()

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._controller is None or event is None:
            return super().mousePressEvent(event)
        self.click_square(self._pos_to_square(event.scenePos()))
        event.accept()

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, file: int, rank: int) -> tuple[int, int]:
        """Convert board file/rank to visual column/row."""
        if self._flipped:
            return 7 - file, rank
        return file, 7 - rank

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        """Scene position → board square."""
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < 8 and 0 <= row < 8):
            return None
        if self._flipped:
            f, r = 7 - col, row
        else:
            f, r = col, 7 - row
        return make_square(f, r)

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        """Create a coloured overlay rectangle on a square."""
        t = self.TILE
        vf, vr = self._visual_coords(file_of(sq), rank_of(sq))
        rect = QGraphicsRectItem(vf * t, vr * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.8)
        self.addItem(rect)
        return rect
