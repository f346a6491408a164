"""Unit tests for connect4net/ai/advisor.py"""

import random

import numpy as np
import pytest

from connect4net.utils import HEIGHT, Side, InvalidStateError
from connect4net.ai.advisor import MoveAdvisor, choose
from connect4net.game.board import Board
from connect4net.game.rules import find_winner


def test_completes_horizontal_four():
    board = Board()
    for column in (1, 2, 3):
        board.apply(column, Side.RED)

    assert MoveAdvisor(seed=0).choose(board, Side.RED) == 4


def test_completes_vertical_four(board_from_moves):
    # Red stacks column 6 while Yellow scatters
    board = board_from_moves([1, 6, 2, 6, 1, 6], first=Side.YELLOW)
    assert MoveAdvisor(seed=0).choose(board, Side.RED) == 6


def test_blocks_opponent_four():
    board = Board()
    for column in (2, 3, 4):
        board.apply(column, Side.YELLOW)
    board.apply(2, Side.RED)
    board.apply(3, Side.RED)

    # Column 1 and 5 both block; the lowest column wins the scan
    assert MoveAdvisor(seed=0).choose(board, Side.RED) == 1


def test_win_takes_priority_over_block():
    board = Board()
    for column in (1, 2, 3):
        board.apply(column, Side.YELLOW)
    for column in (5, 6, 7):
        board.apply(column, Side.RED)

    assert MoveAdvisor(seed=0).choose(board, Side.RED) == 4
    assert MoveAdvisor(seed=0).choose(board, Side.YELLOW) == 4


def test_choose_does_not_modify_board(board_from_moves):
    board = board_from_moves([4, 4, 3, 5, 2])
    before = board.get_state()
    MoveAdvisor(seed=3).choose(board, Side.RED)
    MoveAdvisor(seed=3).choose(board, Side.YELLOW)
    assert np.array_equal(board.grid, before)


def test_never_picks_full_column():
    rng = random.Random(7)
    advisor = MoveAdvisor(seed=7)
    for _ in range(200):
        board = Board()
        side = Side.YELLOW
        while not board.is_full() and find_winner(board) is None:
            column = advisor.choose(board, side)
            assert not board.is_column_full(column)
            assert board.apply(column, side)
            side = side.other() if rng.random() < 0.9 else side


def test_picks_a_winning_column_whenever_one_exists():
    rng = random.Random(11)
    advisor = MoveAdvisor(seed=11)
    for _ in range(300):
        board = Board()
        for _ in range(rng.randint(5, 25)):
            board.apply(rng.choice(board.get_valid_columns()), rng.choice([Side.RED, Side.YELLOW]))
            if find_winner(board) is not None or board.is_full():
                break
        if find_winner(board) is not None or board.is_full():
            continue

        winning = []
        for column in board.get_valid_columns():
            probe = board.copy()
            probe.apply(column, Side.RED)
            if find_winner(probe) == Side.RED:
                winning.append(column)

        column = advisor.choose(board, Side.RED)
        if winning:
            assert column == winning[0]


def test_random_fallback_uses_only_open_columns():
    board = Board()
    # Fill columns 1-6 without creating any threats for either side
    for column in range(1, 7):
        for row in range(HEIGHT):
            board.grid[row, column - 1] = (Side.RED if (row + (column - 1) // 2) % 2 else Side.YELLOW).value
    assert find_winner(board) is None

    advisor = MoveAdvisor(seed=5)
    assert {advisor.choose(board, Side.RED) for _ in range(20)} == {7}


def test_same_seed_same_choices():
    board = Board()
    first = [MoveAdvisor(seed=99).choose(board, Side.RED) for _ in range(5)]
    advisor_a, advisor_b = MoveAdvisor(seed=99), MoveAdvisor(seed=99)
    assert [advisor_a.choose(board, Side.RED) for _ in range(10)] == \
           [advisor_b.choose(board, Side.RED) for _ in range(10)]
    assert len(set(first)) == 1


def test_full_board_raises(draw_board):
    with pytest.raises(InvalidStateError):
        MoveAdvisor().choose(draw_board, Side.RED)


def test_module_level_choose():
    board = Board()
    for column in (5, 6, 7):
        board.apply(column, Side.YELLOW)
    assert choose(board, Side.RED) == 4
    assert choose(board, Side.RED, MoveAdvisor(seed=1)) == 4
