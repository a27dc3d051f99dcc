"""
computer opponent: fixed-priority heuristic

win > block > center > random empty cell. lines are scanned in
board.LINES order (rows, cols, diags) and the first hit is used.
"""
import random

from .board import LINES, Mark

CENTER = 4


def completing_cell(board, mark):
    """
    empty cell of the first line holding two `mark` and one blank
    """
    for line in LINES:
        values = [board[i] for i in line]
        if values.count(mark) == 2 and values.count(Mark.EMPTY) == 1:
            return line[values.index(Mark.EMPTY)]
    return None


def choose_move(board, mark, rng=None):
    """
    pick the computer's next cell for `mark`
    """
    empty = board.empty_cells()
    if not empty:
        raise ValueError("no empty cells to choose from")
    move = completing_cell(board, mark)          # win
    if move is None:
        move = completing_cell(board, mark.opponent)  # block
    if move is None and board.is_empty(CENTER):
        move = CENTER
    if move is None:
        move = (rng or random).choice(empty)
    return move
