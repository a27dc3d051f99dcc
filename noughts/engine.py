"""
boundary between the ui and the game core

the ui calls start_match / submit_move / reset_match / get_view and
subscribes for views pushed after deferred computer moves.
"""
import logging
from collections import namedtuple

from .errors import ConfigurationError, Rejection
from .session import DEFAULT_THINK_DELAY_MS, GameSession

logger = logging.getLogger(__name__)

MoveOutcome = namedtuple("MoveOutcome", ["accepted", "reason", "view"])


class GameEngine:
    """
    owns at most one GameSession; None while the players are in the menu
    """
    def __init__(self, scheduler=None, think_delay_ms=DEFAULT_THINK_DELAY_MS, rng=None):
        self.scheduler = scheduler
        self.think_delay_ms = think_delay_ms
        self.rng = rng
        self._session = None
        self._last_config = None  # wins carry over when the same setup is replayed
        self._last_wins = (0, 0)
        self._listeners = []

    @property
    def session(self):
        return self._session

    def subscribe(self, listener):
        """
        listener(view) is called after every change of the live match
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start_match(self, config):
        """
        validate config and begin a new match, raises ConfigurationError
        """
        config.validate()
        if config.vs_computer and self.scheduler is None:
            # checked before the live match is closed
            raise ConfigurationError("a computer opponent needs a scheduler")
        self._close_session()
        wins = self._last_wins if config == self._last_config else (0, 0)
        session = GameSession(config, scheduler=self.scheduler,
                              think_delay_ms=self.think_delay_ms,
                              rng=self.rng, wins=wins)
        self._session = session
        self._last_config = config
        logger.info("match started: %s vs %s (%d player%s)",
                    config.player1.name, config.player2.name,
                    config.player_count, "" if config.player_count == 1 else "s")
        session.subscribe(self._on_session_changed)
        session.reset_board()
        return session.view()

    def submit_move(self, index):
        """
        human move attempt on the current player's behalf
        """
        session = self._session
        if session is None:
            return MoveOutcome(False, Rejection.NO_MATCH, None)
        if not session.is_terminal and session.current_player.is_computer:
            logger.debug("ignored click on %s while computer to move", index)
            return MoveOutcome(False, Rejection.COMPUTER_TURN, session.view())
        result = session.apply_move(index, session.current_turn)
        return MoveOutcome(result.accepted, result.reason, session.view())

    def reset_match(self):
        if self._session is None:
            return None
        self._session.reset_board()
        return self._session.view()

    def get_view(self):
        if self._session is None:
            return None
        return self._session.view()

    def return_to_menu(self):
        """
        drop the live match; wins are kept for a replay of the same setup
        """
        self._close_session()

    def _close_session(self):
        if self._session is None:
            return
        self._last_wins = self._session.win_counts()
        self._session.close()
        self._session = None
        logger.info("match closed")

    def _on_session_changed(self, session):
        view = session.view()
        for listener in list(self._listeners):
            listener(view)
