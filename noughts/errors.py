from enum import Enum


class Rejection(Enum):
    """
    why a move was ignored
    """
    OCCUPIED = "occupied"
    OUT_OF_RANGE = "out_of_range"
    WRONG_TURN = "wrong_turn"
    GAME_OVER = "game_over"
    COMPUTER_TURN = "computer_turn"
    NO_MATCH = "no_match"


class NoughtsError(Exception):
    """
    base for everything the engine raises
    """


class ConfigurationError(NoughtsError):
    """
    invalid match setup or settings value
    """


class InvalidMoveAttempt(NoughtsError):
    """
    move that must be ignored; carries the reason and the cell
    """
    def __init__(self, reason, index=None):
        self.reason = reason
        self.index = index
        super().__init__(f"move to {index!r} rejected: {reason.value}")
