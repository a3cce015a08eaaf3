"""MainWindow — board, status line and game menu."""

from __future__ import annotations

import logging

from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import QLabel, QMainWindow, QVBoxLayout, QWidget

from chessclick.config import AppSettings
from chessclick.core.enums import Color
from chessclick.core.errors import ControllerError
from chessclick.core.outcome import Draw, GameOutcome, Win
from chessclick.core.types import Square
from chessclick.engine.rules import PythonChessRules
from chessclick.engine.search import SearchLimits
from chessclick.game.controller import GameController
from chessclick.game.interfaces import GamePhase, IPlayer
from chessclick.game.player import HumanSide
from chessclick.ui.board_view import BoardView
from chessclick.ui.engine_session import EngineSession
from chessclick.ui.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window hosting one game against a human or the engine."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("chessclick")
        self._settings = settings or AppSettings()

        limits = SearchLimits(
            max_depth=self._settings.engine_depth,
            time_limit_ms=self._settings.engine_time_ms,
        )
        self._controller = GameController(PythonChessRules(limits))
        self._engine_session = EngineSession(
            controller=self._controller,
            set_status=self._set_status,
            parent=self,
            max_depth=self._settings.engine_depth,
            time_limit_ms=self._settings.engine_time_ms,
        )
        self._engine_session.setup()

        self._board_view = BoardView(self)
        self._status_label = QLabel()

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.addWidget(self._board_view)
        layout.addWidget(self._status_label)
        self.setCentralWidget(central)

        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.named(self._settings.board_theme))
        scene.set_show_legal_moves(self._settings.show_legal_moves)
        scene.bind(self._controller)
        scene.error_raised.connect(self._set_status)

        events = self._controller.events
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_check_changed.append(self._on_check_changed)
        events.on_game_ended.append(self._on_game_ended)
        events.on_error.append(self._on_controller_error)

        self._build_menu()
        self.start_game()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    # ── Game lifecycle ───────────────────────────────────────────────────

    def start_game(self, *, vs_engine: bool | None = None) -> None:
        """Start a game using the configured sides."""
        if vs_engine is None:
            vs_engine = self._settings.vs_engine

        human_color = self._settings.human_color
        white: IPlayer
        black: IPlayer
        if not vs_engine:
            white = HumanSide(Color.WHITE, "White")
            black = HumanSide(Color.BLACK, "Black")
        elif human_color == Color.WHITE:
            white = HumanSide(Color.WHITE, "You")
            black = self._engine_session.create_automated_side(Color.BLACK)
        else:
            white = self._engine_session.create_automated_side(Color.WHITE)
            black = HumanSide(Color.BLACK, "You")

        scene = self._board_view.board_scene
        scene.set_flipped(vs_engine and human_color == Color.BLACK)
        self._controller.new_game(white, black)
        scene.sync_from_controller()
        self._update_status()

    # ── Menu ─────────────────────────────────────────────────────────────

    def _build_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None
        game_menu = menu_bar.addMenu("&Game")
        assert game_menu is not None

        act_vs_engine = QAction("New game vs engine", self)
        act_vs_engine.setShortcut("Ctrl+N")
        act_vs_engine.triggered.connect(lambda: self.start_game(vs_engine=True))
        game_menu.addAction(act_vs_engine)

        act_vs_human = QAction("New game vs human", self)
        act_vs_human.triggered.connect(lambda: self.start_game(vs_engine=False))
        game_menu.addAction(act_vs_human)

        act_flip = QAction("Flip board", self)
        act_flip.setShortcut("Ctrl+F")
        act_flip.triggered.connect(self._on_flip)
        game_menu.addAction(act_flip)

        game_menu.addSeparator()
        act_quit = QAction("Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        game_menu.addAction(act_quit)

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    # ── Controller events ────────────────────────────────────────────────

    def _on_phase_changed(self, _phase: GamePhase) -> None:
        self._update_status()

    def _on_check_changed(self, _king_square: Square | None) -> None:
        self._update_status()

    def _on_game_ended(self, outcome: GameOutcome) -> None:
        self._set_status(_describe_outcome(outcome))

    def _on_controller_error(self, error: ControllerError) -> None:
        self._set_status(str(error))

    def _update_status(self) -> None:
        session = self._controller.session
        if session.is_game_over:
            self._set_status(_describe_outcome(session.outcome))
            return
        if session.phase is GamePhase.AUTOMATED_TURN:
            self._set_status("Engine is thinking…")
            return
        side = "White" if session.side_to_move == Color.WHITE else "Black"
        text = f"{side} to move"
        if session.check_square is not None:
            text += ", check"
        if session.phase is GamePhase.PENDING_PROMOTION:
            text += " (choose promotion)"
        self._set_status(text)

    def _set_status(self, text: str) -> None:
        self._status_label.setText(text)

    # ── Qt overrides ─────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent | None) -> None:
        _LOGGER.debug("Shutting down engine session")
        self._engine_session.shutdown()
        super().closeEvent(event)


def _describe_outcome(outcome: GameOutcome) -> str:
    if isinstance(outcome, Win):
        winner = "White" if outcome.winner == Color.WHITE else "Black"
        return f"Checkmate: {winner} wins"
    if isinstance(outcome, Draw):
        return f"Draw by {outcome.reason.value.replace('_', ' ')}"
    return ""
