import logging
import random

from ..engine import GameEngine
from ..errors import ConfigurationError
from ..scheduling import QtScheduler
from ..session import MatchConfig, PlayerConfig
from ..settings import Settings
from ..board import Status
from ..ui.board_widget import BoardWidget
from ..ui.fade import fade_in, fade_out

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QLineEdit, QComboBox,
    QGroupBox, QMessageBox, QSizePolicy
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, QTimer, Slot

logger = logging.getLogger(__name__)

ERROR_MS = 1000      # how long setup errors stay up
MESSAGE_MS = 3000    # how long win/draw banners stay up
COMPUTER_NAME = "Computer"
PLAYER2_NAME = "Player 2"


class NoughtsWindow(QMainWindow):
    """
    setup screen + board screen around one GameEngine
    """
    def __init__(self, settings=None, engine=None):
        """
        init engine, ui widgets, signals
        """
        super().__init__()
        self.settings = settings or Settings()
        self.scheduler = QtScheduler(self)
        if engine is None:
            engine = GameEngine(self.scheduler,
                                think_delay_ms=self.settings.think_delay_ms,
                                rng=random.Random(self.settings.seed))
        self.engine = engine
        self.engine.subscribe(self._on_view_changed)
        self.board_widget = BoardWidget(parent=self)
        # fades out transient banners
        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(self._fade_message)

        self._setup_ui()
        self._show_setup(animate=False)

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Noughts")
        self.setStyleSheet("""
            QMainWindow { background-color: #222; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self._create_setup_page()          # player options
        self._create_game_page()           # board + controls
        self.main_layout.addWidget(self.setup_page)
        self.main_layout.addWidget(self.game_page, 1)

        self.message_label = QLabel("")
        f = QFont(); f.setPointSize(12); self.message_label.setFont(f)
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        self.main_layout.addWidget(self.message_label)

        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        self.restart_action = QAction("Restart", self)
        self.restart_action.triggered.connect(self._on_restart)
        self.menu_action = QAction("Back to Menu", self)
        self.menu_action.triggered.connect(self._on_menu)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (self.restart_action, self.menu_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_setup_page(self):
        '''player count, names, symbols, who starts'''
        self.setup_page = QGroupBox("New Game")
        layout = QGridLayout(self.setup_page)
        self.players_combo = QComboBox()
        self.players_combo.addItem("1 Player (vs Computer)", 1)
        self.players_combo.addItem("2 Players", 2)
        self.players_combo.currentIndexChanged.connect(self._on_player_count_changed)
        layout.addWidget(QLabel("Players:"), 0, 0)
        layout.addWidget(self.players_combo, 0, 1, 1, 2)

        self.player1_name = QLineEdit("Player 1")
        self.player1_symbol = QLineEdit("X")
        self.player2_title = QLabel(COMPUTER_NAME)
        self.player2_name = QLineEdit(COMPUTER_NAME)
        self.player2_symbol = QLineEdit("O")
        for edit in (self.player1_symbol, self.player2_symbol):
            edit.setMaxLength(3); edit.setMaximumWidth(60)
        layout.addWidget(QLabel("Player 1"), 1, 0)
        layout.addWidget(self.player1_name, 1, 1)
        layout.addWidget(self.player1_symbol, 1, 2)
        layout.addWidget(self.player2_title, 2, 0)
        layout.addWidget(self.player2_name, 2, 1)
        layout.addWidget(self.player2_symbol, 2, 2)

        self.starting_combo = QComboBox()
        self.starting_combo.addItem("Player 1", 0)
        self.starting_combo.addItem("Player 2", 1)
        layout.addWidget(QLabel("Goes first:"), 3, 0)
        layout.addWidget(self.starting_combo, 3, 1, 1, 2)

        self.start_button = QPushButton("Start")
        self.start_button.clicked.connect(self._on_start)
        layout.addWidget(self.start_button, 4, 0, 1, 3, alignment=Qt.AlignCenter)

    def _create_game_page(self):
        # score line, board, menu/restart buttons
        self.game_page = QWidget()
        vl = QVBoxLayout(self.game_page)
        self.score_label = QLabel("")
        self.score_label.setAlignment(Qt.AlignCenter)
        vl.addWidget(self.score_label)
        vl.addWidget(self.board_widget, 1)
        controls = QWidget()
        hl = QHBoxLayout(controls)
        self.status_label = QLabel("")
        self.status_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.menu_button = QPushButton("Menu"); self.menu_button.clicked.connect(self._on_menu)
        self.restart_button = QPushButton("Restart"); self.restart_button.clicked.connect(self._on_restart)
        for w in (self.status_label, None, self.menu_button, self.restart_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)
        vl.addWidget(controls)

    # --- page switching ------------------------------------------------

    def _show_setup(self, animate=True):
        self.restart_action.setEnabled(False); self.menu_action.setEnabled(False)
        if animate:
            fade_out(self.game_page, lambda: fade_in(self.setup_page))
        else:
            self.game_page.hide(); self.setup_page.show()

    def _show_game(self):
        self.restart_action.setEnabled(True); self.menu_action.setEnabled(True)
        fade_out(self.setup_page, lambda: fade_in(self.game_page))

    # --- messages ------------------------------------------------------

    def _update_message(self, text, is_error=False, is_success=False, timeout_ms=None):
        # fade message in, optionally fade it out timeout_ms after
        style = "color: #eee;"
        if is_error:     style = "color: #ff8a8a; font-weight: bold;"
        elif is_success: style = "color: lime; font-weight: bold;"
        self._message_timer.stop()
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)
        done = (lambda: self._message_timer.start(timeout_ms)) if timeout_ms else None
        fade_in(self.message_label, done)

    @Slot()
    def _fade_message(self):
        fade_out(self.message_label, self._clear_message)

    @Slot()
    def _clear_message(self):
        self._message_timer.stop()
        self.message_label.setText("")

    # --- slots ---------------------------------------------------------

    @Slot(int)
    def _on_player_count_changed(self, _index):
        # player 2 is named after who plays it
        name = PLAYER2_NAME if self.players_combo.currentData() == 2 else COMPUTER_NAME
        self.player2_title.setText(name)
        self.player2_name.setText(name)

    def _read_config(self):
        return MatchConfig(
            player_count=self.players_combo.currentData(),
            player1=PlayerConfig(self.player1_name.text().strip(),
                                 self.player1_symbol.text().strip()),
            player2=PlayerConfig(self.player2_name.text().strip(),
                                 self.player2_symbol.text().strip()),
            starting_player=self.starting_combo.currentData(),
        )

    @Slot()
    def _on_start(self):
        try:
            self.engine.start_match(self._read_config())
        except ConfigurationError as exc:
            logger.debug("match setup rejected: %s", exc)
            self._update_message(str(exc), is_error=True, timeout_ms=ERROR_MS)
            return
        self._clear_message()
        self._show_game()

    @Slot(int)
    def _on_cell_clicked(self, index):
        # occupied cell, wrong turn, finished game: nothing happens;
        # accepted moves come back through _on_view_changed
        outcome = self.engine.submit_move(index)
        logger.debug("click on %d accepted=%s", index, outcome.accepted)

    @Slot()
    def _on_restart(self):
        if self.engine.session is None:
            return
        fade_out(self.board_widget, self._restart_board)

    def _restart_board(self):
        self.engine.reset_match()
        self._clear_message()
        fade_in(self.board_widget)

    @Slot()
    def _on_menu(self):
        if self.engine.session is None:
            return
        answer = QMessageBox.question(self, "Menu", "Back to the main menu?")
        if answer != QMessageBox.Yes:
            return
        self.engine.return_to_menu()
        self._clear_message()
        self._show_setup()

    def _on_view_changed(self, view):
        # pushed by the engine, also after the computer's deferred move
        self._render(view)
        if view.is_terminal:
            self._announce(view)

    # --- rendering -----------------------------------------------------

    def _announce(self, view):
        if view.status is Status.WON:
            name = view.winner_player.name
            self._update_message(f"Winner! Congratulations {name}!",
                                 is_success=True, timeout_ms=MESSAGE_MS)
        elif view.status is Status.DRAWN:
            self._update_message("Draw!", timeout_ms=MESSAGE_MS)

    def _render(self, view):
        self.board_widget.set_view(view)
        p1, p2 = view.players
        self.score_label.setText(f"{p1.name} ({p1.symbol}): {p1.wins}    "
                                 f"{p2.name} ({p2.symbol}): {p2.wins}")
        current = view.current_player
        if view.status is Status.WON:
            self.status_label.setText(f"{view.winner_player.name} wins")
        elif view.status is Status.DRAWN:
            self.status_label.setText("draw")
        elif current.is_computer:
            self.status_label.setText(f"{current.name} is thinking...")
        else:
            self.status_label.setText(f"{current.name}'s turn ({current.symbol})")
        self.board_widget.set_accept_clicks(not view.is_terminal and not current.is_computer)

    def closeEvent(self, event):
        # drop any pending computer move on close
        self.engine.return_to_menu()
        event.accept()
