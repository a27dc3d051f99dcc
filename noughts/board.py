from collections import namedtuple
from enum import Enum

from .errors import InvalidMoveAttempt, Rejection

BOARD_SIZE = 3                    # fixed 3x3 grid
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

# rows, then cols, then diags; selector scan order depends on this
LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


class Mark(Enum):
    """
    what a cell holds
    """
    EMPTY = "-"
    A = "a"
    B = "b"

    @property
    def opponent(self):
        if self is Mark.A:
            return Mark.B
        if self is Mark.B:
            return Mark.A
        raise ValueError("empty mark has no opponent")


class Status(Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAWN = "drawn"


Termination = namedtuple("Termination", ["status", "winner", "line"])
IN_PROGRESS = Termination(Status.IN_PROGRESS, None, None)


class Board:
    """
    nine cells, row-major (row = i // 3, col = i % 3)
    """
    def __init__(self, cells=None):
        if cells is None:
            cells = [Mark.EMPTY] * CELL_COUNT
        cells = list(cells)
        if len(cells) != CELL_COUNT or not all(isinstance(c, Mark) for c in cells):
            raise ValueError(f"board needs {CELL_COUNT} Mark values")
        self._cells = cells

    @classmethod
    def from_string(cls, text):
        """
        build from 9 chars of '-', 'a', 'b' (case-insensitive)
        """
        return cls(Mark(ch) for ch in text.lower())

    def __getitem__(self, index):
        return self._cells[index]

    def __iter__(self):
        return iter(self._cells)

    def __len__(self):
        return CELL_COUNT

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self):
        return f"Board({self.as_string()!r})"

    def as_string(self):
        # compact form used in logs, e.g. 'ab--a----'
        return "".join(c.value for c in self._cells)

    def cells(self):
        return tuple(self._cells)

    def copy(self):
        return Board(self._cells)

    def is_empty(self, index):
        """
        true if index valid and cell blank
        """
        return 0 <= index < CELL_COUNT and self._cells[index] is Mark.EMPTY

    def empty_cells(self):
        return [i for i, c in enumerate(self._cells) if c is Mark.EMPTY]

    def count(self, mark):
        return self._cells.count(mark)

    def place(self, index, mark):
        """
        put mark in an empty cell, raise InvalidMoveAttempt otherwise
        """
        if mark is Mark.EMPTY:
            raise ValueError("cannot place an empty mark")
        if isinstance(index, bool) or not isinstance(index, int) \
           or not 0 <= index < CELL_COUNT:
            raise InvalidMoveAttempt(Rejection.OUT_OF_RANGE, index)
        if self._cells[index] is not Mark.EMPTY:
            raise InvalidMoveAttempt(Rejection.OCCUPIED, index)
        self._cells[index] = mark

    def clear(self):
        self._cells = [Mark.EMPTY] * CELL_COUNT

    def winning_line(self):
        """
        first completed line as (mark, triple), or None
        """
        for line in LINES:
            a, b, c = (self._cells[i] for i in line)
            if a is not Mark.EMPTY and a is b is c:
                return a, line
        return None

    def is_full(self):
        return Mark.EMPTY not in self._cells


def evaluate(board):
    """
    classify a board: win is checked before draw, so a full board
    with a completed line counts as won
    """
    found = board.winning_line()
    if found:
        mark, line = found
        return Termination(Status.WON, mark, line)
    if board.is_full():
        return Termination(Status.DRAWN, None, None)
    return IN_PROGRESS
