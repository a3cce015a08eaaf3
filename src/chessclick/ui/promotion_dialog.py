"""Promotion dialog — lets the user pick among promotion candidates."""

from __future__ import annotations

from collections.abc import Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chessclick.core.enums import PROMOTION_PIECES, Color
from chessclick.core.move import Move
from chessclick.core.piece import Piece


class PromotionDialog(QDialog):
    """Modal dialog with one button per candidate move."""

    def __init__(
        self,
        candidates: Sequence[Move],
        color: Color,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle("Promotion")
        self.setWindowFlags(
            self.windowFlags() & ~Qt.WindowType.WindowContextHelpButtonHint
        )

        self._selected: Move | None = None
        self._buttons: list[QPushButton] = []

        layout = QVBoxLayout(self)
        label = QLabel("Promote pawn to:")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)

        btn_row = QHBoxLayout()
        choices = sorted(
            (m for m in candidates if m.promotion in PROMOTION_PIECES),
            key=lambda m: PROMOTION_PIECES.index(m.promotion),
        )
        for move in choices:
            btn = QPushButton(Piece(color, move.promotion).symbol)
            btn.setFont(QFont("DejaVu Sans", 28))
            btn.setFixedSize(68, 68)
            btn.setToolTip(move.promotion.name.capitalize())
            btn.clicked.connect(lambda _checked, m=move: self._choose(m))
            btn_row.addWidget(btn)
            self._buttons.append(btn)

        layout.addLayout(btn_row)

    def _choose(self, move: Move) -> None:
        self._selected = move
        self.accept()

    @property
    def selected(self) -> Move | None:
        return self._selected

    @property
    def buttons(self) -> list[QPushButton]:
        return list(self._buttons)

    @staticmethod
    def ask(
        candidates: Sequence[Move],
        color: Color,
        parent: QWidget | None = None,
    ) -> Move | None:
        """Show the dialog and return the chosen move, or ``None`` on cancel."""
        dlg = PromotionDialog(candidates, color, parent)
        if dlg.exec() == QDialog.DialogCode.Accepted:
            return dlg.selected
        return None
