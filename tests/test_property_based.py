from typing import List

import pytest
from hypothesis import given, strategies as st

from noughts.board import LINES, Board, Mark, Status, evaluate
from noughts.selector import choose_move
from noughts.session import GameSession, MatchConfig, PlayerConfig

TWO_PLAYERS = MatchConfig(2, PlayerConfig("Ann", "X"), PlayerConfig("Bob", "O"))

marks = st.sampled_from([Mark.EMPTY, Mark.A, Mark.B])


@given(st.lists(st.integers(min_value=-2, max_value=10), max_size=30))
def test_counts_stay_balanced(moves: List[int]):
    session = GameSession(TWO_PLAYERS)
    for idx in moves:
        session.apply_move(idx, session.current_turn)
        a, b = session.board.count(Mark.A), session.board.count(Mark.B)
        assert a - b in (0, 1)


@given(st.permutations(list(range(9))), st.integers(min_value=0, max_value=9),
       st.integers(min_value=0, max_value=8), st.integers(min_value=0, max_value=1))
def test_rejected_moves_change_nothing(order, n, target, player):
    session = GameSession(TWO_PLAYERS)
    for idx in order[:n]:
        session.apply_move(idx, session.current_turn)
    before = (session.board.copy(), session.current_turn, session.termination, session.win_counts())
    result = session.apply_move(target, player)
    if not result.accepted:
        after = (session.board, session.current_turn, session.termination, session.win_counts())
        assert after == before
    else:
        assert before[0].is_empty(target)
        assert player == before[1]


@given(st.lists(marks, min_size=9, max_size=9), st.sampled_from([Mark.A, Mark.B]))
def test_selector_picks_empty_and_never_misses_a_win(cells, mark):
    board = Board(cells)
    if board.is_full():
        with pytest.raises(ValueError):
            choose_move(board, mark)
        return
    move = choose_move(board, mark)
    assert board.is_empty(move)
    can_win = any(
        [board[i] for i in line].count(mark) == 2 and [board[i] for i in line].count(Mark.EMPTY) == 1
        for line in LINES
    )
    if can_win:
        after = board.copy()
        after.place(move, mark)
        assert any(all(after[i] is mark for i in line) for line in LINES)


@given(st.lists(marks, min_size=9, max_size=9))
def test_full_board_is_never_in_progress(cells):
    result = evaluate(Board(cells))
    if Mark.EMPTY not in cells:
        assert result.status in (Status.WON, Status.DRAWN)
    if Board(cells).winning_line():
        assert result.status is Status.WON
