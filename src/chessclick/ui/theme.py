"""Visual theme constants and QSS styles for the board window."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    selected: QColor  # selected piece origin
    reachable: QColor  # legal destinations of the selection
    check: QColor  # king in check
    last_move: QColor
    piece_white: QColor
    piece_black: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            selected=QColor(255, 255, 0, 100),  # yellow transparent
            reachable=QColor(0, 0, 0, 40),
            check=QColor(255, 0, 0, 120),  # red transparent
            last_move=QColor(155, 199, 0, 105),  # green
            piece_white=QColor(255, 255, 255),
            piece_black=QColor(20, 20, 20),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            selected=QColor(255, 255, 0, 100),
            reachable=QColor(0, 0, 0, 40),
            check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            piece_white=QColor(255, 255, 255),
            piece_black=QColor(20, 20, 20),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            selected=QColor(255, 255, 0, 100),
            reachable=QColor(0, 0, 0, 40),
            check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            piece_white=QColor(255, 255, 255),
            piece_black=QColor(20, 20, 20),
        )

    @classmethod
    def named(cls, name: str) -> BoardTheme:
        themes = {
            "Classic": cls.default,
            "Blue": cls.blue,
            "Green": cls.green,
        }
        return themes.get(name, cls.default)()


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-size: 13px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}

QMenuBar {
    background: #2b2b2b;
    color: #e0e0e0;
}
QMenu {
    background: #2b2b2b;
    color: #e0e0e0;
    border: 1px solid #3c3c3c;
}
QMenu::item:selected {
    background: #264f78;
}
"""
