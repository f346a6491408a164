"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures shared by the engine, session and network tests.
"""

from typing import Callable, Iterable, List, Optional

import pytest

from connect4net.utils import Side
from connect4net.game.board import Board
from connect4net.game.rules import ConnectFourGame
from connect4net.game.session import Player

R, Y = Side.RED.value, Side.YELLOW.value

# Full board without four in a row anywhere, bottom row first
DRAW_ROWS = [
    [R, R, Y, Y, R, R, Y],
    [Y, Y, R, R, Y, Y, R],
    [R, R, Y, Y, R, R, Y],
    [Y, Y, R, R, Y, Y, R],
    [R, R, Y, Y, R, R, Y],
    [Y, Y, R, R, Y, Y, R],
]


def position(rows: List[List[int]]) -> str:
    """Flatten rows (bottom row first) into the comma separated position format."""
    return ",".join(str(v) for row in rows for v in row)


@pytest.fixture
def board_from_moves() -> Callable[..., Board]:
    """Call the inner function with 1-based columns played alternately, Yellow first by default."""

    def _create_board(columns: Iterable[int], first: Side = Side.YELLOW) -> Board:
        board = Board()
        side = first
        for column in columns:
            assert board.apply(column, side)
            side = side.other()
        return board

    return _create_board


@pytest.fixture
def draw_board() -> Board:
    return Board.from_position(position(DRAW_ROWS))


class ScriptedPlayer(Player):
    """Plays a fixed list of columns, then ends the session."""

    def __init__(self, side: Side, columns: Iterable[int]):
        super().__init__(side)
        self.columns = list(columns)
        self.seen: List[tuple] = []

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        if not self.columns:
            return None
        return self.columns.pop(0)

    def move_played(self, game: ConnectFourGame, side: Side, column: int) -> None:
        self.seen.append((side, column))


@pytest.fixture
def scripted_player() -> Callable[[Side, Iterable[int]], ScriptedPlayer]:
    return ScriptedPlayer


class OutputRecorder:
    """Stand-in for print() that keeps every line."""

    def __init__(self):
        self.lines: List[str] = []

    def __call__(self, *args, end: str = "\n", **kwargs) -> None:
        self.lines.append(" ".join(str(a) for a in args) + end)

    @property
    def text(self) -> str:
        return "".join(self.lines)


@pytest.fixture
def output() -> OutputRecorder:
    return OutputRecorder()
