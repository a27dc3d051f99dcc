"""
match state: board, players, turn sequencing and the computer's turn

GameSession is the single owner of its Board. Human moves come in
through apply_move(); computer moves are scheduled behind a think
delay and re-validated when the timer fires, so a reset or close
during the delay drops the stale move instead of applying it.
"""
import logging
from collections import namedtuple
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .board import IN_PROGRESS, Board, Mark, Status, evaluate
from .errors import ConfigurationError, InvalidMoveAttempt, Rejection
from .selector import choose_move

logger = logging.getLogger(__name__)

DEFAULT_THINK_DELAY_MS = 1000


@dataclass(frozen=True)
class PlayerConfig:
    name: str
    symbol: str


@dataclass(frozen=True)
class MatchConfig:
    """
    set once before a match, immutable during play
    """
    player_count: int = 1
    player1: PlayerConfig = PlayerConfig("Player 1", "X")
    player2: PlayerConfig = PlayerConfig("Computer", "O")
    starting_player: int = 0

    @property
    def vs_computer(self):
        return self.player_count == 1

    def validate(self):
        """
        raise ConfigurationError if the setup can't start a match
        """
        if self.player_count not in (1, 2):
            raise ConfigurationError("Number of players must be 1 or 2")
        if self.starting_player not in (0, 1):
            raise ConfigurationError("Starting player must be 0 or 1")
        s1 = _text(self.player1.symbol); s2 = _text(self.player2.symbol)
        if not s1 or not s2:
            raise ConfigurationError("Both players must have a symbol")
        if s1 == s2:
            raise ConfigurationError("Player symbols cannot match")
        if not _text(self.player1.name) or not _text(self.player2.name):
            raise ConfigurationError("Both players must have a name")
        return self


def _text(value):
    # missing or non-string fields count as empty
    return value.strip() if isinstance(value, str) else ""


@dataclass
class Player:
    name: str
    symbol: str
    mark: Mark
    is_computer: bool = False
    wins: int = 0


@dataclass(frozen=True)
class PlayerView:
    name: str
    symbol: str
    mark: Mark
    wins: int
    is_computer: bool


@dataclass(frozen=True)
class GameView:
    """
    read-only snapshot handed to the ui
    """
    cells: Tuple[Mark, ...]
    players: Tuple[PlayerView, PlayerView]
    current_turn: int
    status: Status
    winner: Optional[int] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    vs_computer: bool = False
    thinking: bool = False
    symbols: Tuple[str, ...] = field(init=False)

    def __post_init__(self):
        by_mark = {p.mark: p.symbol for p in self.players}
        by_mark[Mark.EMPTY] = ""
        object.__setattr__(self, "symbols", tuple(by_mark[c] for c in self.cells))

    @property
    def is_terminal(self):
        return self.status is not Status.IN_PROGRESS

    @property
    def current_player(self):
        return self.players[self.current_turn]

    @property
    def winner_player(self):
        return None if self.winner is None else self.players[self.winner]


MoveResult = namedtuple("MoveResult", ["accepted", "reason", "index"])


class GameSession:
    """
    one match: configuration plus live board/turn state
    """
    def __init__(self, config, scheduler=None, think_delay_ms=DEFAULT_THINK_DELAY_MS,
                 rng=None, wins=(0, 0)):
        config.validate()
        if config.vs_computer and scheduler is None:
            raise ConfigurationError("a computer opponent needs a scheduler")
        self.config = config
        self.scheduler = scheduler
        self.think_delay_ms = think_delay_ms
        self.rng = rng
        self.players = (
            Player(config.player1.name, config.player1.symbol, Mark.A, wins=wins[0]),
            Player(config.player2.name, config.player2.symbol, Mark.B,
                   is_computer=config.vs_computer, wins=wins[1]),
        )
        self.board = Board()
        self.starting_turn = config.starting_player
        self.current_turn = self.starting_turn
        self.termination = IN_PROGRESS
        self._generation = 0    # bumped on reset/close; stale timers compare against it
        self._pending = None    # handle of the scheduled computer move
        self._closed = False
        self._listeners = []

    # --- queries -------------------------------------------------------

    @property
    def current_player(self):
        return self.players[self.current_turn]

    @property
    def is_won(self):
        return self.termination.status is Status.WON

    @property
    def is_drawn(self):
        return self.termination.status is Status.DRAWN

    @property
    def is_terminal(self):
        return self.termination.status is not Status.IN_PROGRESS

    @property
    def thinking(self):
        return self._pending is not None

    @property
    def closed(self):
        return self._closed

    def win_counts(self):
        return tuple(p.wins for p in self.players)

    def winner_index(self):
        if not self.is_won:
            return None
        return 0 if self.termination.winner is self.players[0].mark else 1

    def view(self):
        return GameView(
            cells=self.board.cells(),
            players=tuple(PlayerView(p.name, p.symbol, p.mark, p.wins, p.is_computer)
                          for p in self.players),
            current_turn=self.current_turn,
            status=self.termination.status,
            winner=self.winner_index(),
            winning_line=self.termination.line,
            vs_computer=self.config.vs_computer,
            thinking=self.thinking,
        )

    def subscribe(self, listener):
        """
        listener(session) runs after every state change
        """
        self._listeners.append(listener)

    # --- mutation ------------------------------------------------------

    def apply_move(self, index, acting_player):
        """
        place acting_player's mark at index; ignored moves leave state untouched
        """
        try:
            self._check_can_move(acting_player)
            self.board.place(index, self.players[acting_player].mark)
        except InvalidMoveAttempt as exc:
            logger.debug("ignored move by player %s: %s", acting_player, exc)
            return MoveResult(False, exc.reason, index)
        logger.info("%s played %d -> %s", self.players[acting_player].name,
                    index, self.board.as_string())
        self._cancel_pending()  # a pending computer move is stale now
        self._finish_move()
        self._notify()
        return MoveResult(True, None, index)

    def evaluate_termination(self):
        """
        check win then draw and record a finished game

        safe to call repeatedly: a finished game is returned as is and
        the turn never changes here.
        """
        if self.is_terminal:
            return self.termination
        result = evaluate(self.board)
        if result.status is Status.WON:
            winner = self.players[0] if result.winner is self.players[0].mark else self.players[1]
            winner.wins += 1
            self.termination = result
            logger.info("winner: %s (wins=%d)", winner.name, winner.wins)
        elif result.status is Status.DRAWN:
            self.termination = result
            logger.info("draw")
        return result

    def reset_board(self):
        """
        fresh board, same players and win counters
        """
        self._cancel_pending()
        self._generation += 1
        self.board.clear()
        self.current_turn = self.starting_turn
        self.termination = IN_PROGRESS
        logger.info("board reset, %s starts", self.current_player.name)
        # opening move: no turn swap here
        self._next_turn(swap=False)
        self._notify()

    def close(self):
        """
        end the session; any pending computer move is dropped
        """
        self._cancel_pending()
        self._generation += 1
        self._closed = True
        self._listeners = []

    # --- internals -----------------------------------------------------

    def _check_can_move(self, acting_player):
        if self._closed or self.is_terminal:
            raise InvalidMoveAttempt(Rejection.GAME_OVER)
        if acting_player != self.current_turn:
            raise InvalidMoveAttempt(Rejection.WRONG_TURN)

    def _finish_move(self):
        # once per placed mark: end the game or hand over the turn
        if self.evaluate_termination().status is Status.IN_PROGRESS:
            self._next_turn()

    def _next_turn(self, swap=True):
        if swap:
            self.current_turn = 1 - self.current_turn
        if self.current_player.is_computer:
            self._schedule_computer_move()

    def _schedule_computer_move(self):
        if self._pending is not None:
            return  # only one move in flight
        generation = self._generation
        self._pending = self.scheduler.schedule(
            self.think_delay_ms, lambda: self._play_computer_move(generation))

    def _play_computer_move(self, generation):
        if generation != self._generation:
            logger.debug("discarding computer move from an earlier board")
            return
        self._pending = None
        if self._closed or self.is_terminal or not self.current_player.is_computer:
            logger.debug("discarding computer move, no longer its turn")
            return
        player = self.current_player
        index = choose_move(self.board, player.mark, self.rng)
        self.board.place(index, player.mark)
        logger.info("%s played %d -> %s", player.name, index, self.board.as_string())
        self._finish_move()
        self._notify()

    def _cancel_pending(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)
