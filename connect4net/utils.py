"""
utils.py - Constants, enumerations and helper functions for connect4net

This module provides the board dimensions, side markers, game results,
exception types and the fixed-width board renderer shared by the engine,
the session loops and the network transport.
"""

from enum import Enum, auto
from typing import Tuple, List

import numpy as np

# Game constants
WIDTH = 7      # number of columns
HEIGHT = 6     # number of slots in each column
STRAIGHT = 4   # number in a row required for victory

# Display grid: each cell is WGRID characters wide and HGRID lines high
WGRID = 5
HGRID = 3

# Runtime defaults (overridable from the command line)
RSEED = 876545678
READ_SIZE = 255
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
LOG_FILE = "log.txt"
THINK_DELAY = 1.0


class Connect4Error(Exception):
    """Base class for all game errors."""


class InvalidMoveError(Connect4Error):
    """A column or side that cannot be played."""


class InvalidStateError(Connect4Error):
    """An operation that is impossible in the current board state."""


class Side(Enum):
    """Enumeration representing the two sides and the empty cell."""
    EMPTY = 0
    RED = 1
    YELLOW = 2

    def other(self) -> "Side":
        """Get the opposing side."""
        if self == Side.RED:
            return Side.YELLOW
        elif self == Side.YELLOW:
            return Side.RED
        return Side.EMPTY

    @property
    def marker(self) -> str:
        return MARKERS[self]

    def __str__(self):
        return self.name.capitalize()


MARKERS = {
    Side.EMPTY: " ",
    Side.RED: "R",
    Side.YELLOW: "Y",
}


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    RED_WIN = auto()
    YELLOW_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> "Side | None":
        if self == GameResult.RED_WIN:
            return Side.RED
        if self == GameResult.YELLOW_WIN:
            return Side.YELLOW
        return None

    @classmethod
    def win_for(cls, side: Side) -> "GameResult":
        if side == Side.RED:
            return cls.RED_WIN
        if side == Side.YELLOW:
            return cls.YELLOW_WIN
        raise InvalidMoveError(f"No result for side {side!r}")


class Axis(Enum):
    """The four lines along which a straight can be formed."""
    VERTICAL = auto()
    HORIZONTAL = auto()
    DIAGONAL_UP = auto()    # bottom-left to top-right
    DIAGONAL_DOWN = auto()  # top-left to bottom-right


# Direction vectors (row, col) for each axis, row 0 is the bottom row.
# Every axis is explored along both signs of its vector.
AXIS_VECTORS = {
    Axis.VERTICAL: (1, 0),
    Axis.HORIZONTAL: (0, 1),
    Axis.DIAGONAL_UP: (1, 1),
    Axis.DIAGONAL_DOWN: (-1, 1),
}


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index (0 is the bottom row)
        col: Column index (0-indexed)

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < HEIGHT and 0 <= col < WIDTH


def check_column(column) -> int:
    """
    Validate a 1-based column number and return its 0-based grid index.

    Raises:
        InvalidMoveError: if the column is not an integer in 1..WIDTH
    """
    if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
        raise InvalidMoveError(f"Column must be an integer, got {column!r}")
    if not 1 <= column <= WIDTH:
        raise InvalidMoveError(f"Column {column} is outside 1..{WIDTH}")
    return int(column) - 1


def explore(grid: np.ndarray, row: int, col: int, dr: int, dc: int) -> bool:
    """
    Check for a straight starting at (row, col) and running along (dr, dc).

    The far end is bounds-checked before any cell is read, so a run that
    would leave the board is rejected without touching the array.
    """
    end_row = row + (STRAIGHT - 1) * dr
    end_col = col + (STRAIGHT - 1) * dc
    if not is_valid_position(end_row, end_col):
        return False

    value = grid[row, col]
    for i in range(1, STRAIGHT):
        if grid[row + i * dr, col + i * dc] != value:
            return False
    return True


def find_straight_at(grid: np.ndarray, row: int, col: int) -> List[Tuple[int, int]]:
    """
    Find a straight that starts at the given occupied cell.

    Returns:
        The STRAIGHT positions of the first line found (axis order, positive
        sign before negative), or an empty list
    """
    if grid[row, col] == Side.EMPTY.value:
        return []

    for dr, dc in AXIS_VECTORS.values():
        for sign in (1, -1):
            if explore(grid, row, col, sign * dr, sign * dc):
                return [(row + i * sign * dr, col + i * sign * dc) for i in range(STRAIGHT)]
    return []


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render the board as fixed-width text.

    The top row is printed first; each cell is a WGRID x HGRID block filled
    with the side marker, followed by a ruled bottom line and a legend that
    labels the columns 1..WIDTH.

    Args:
        grid: The board grid (row 0 is the bottom row)

    Returns:
        ASCII representation of the board
    """
    lines = [""]
    for row in range(HEIGHT - 1, -1, -1):
        cells = "|".join(MARKERS[Side(int(v))] * WGRID for v in grid[row])
        lines.extend(["\t|" + cells + "|"] * HGRID)

    lines.append("\t+" + "+".join("-" * WGRID for _ in range(WIDTH)) + "+")

    left = " " * ((WGRID - 1) // 2)
    right = " " * (WGRID - 1 - (WGRID - 1) // 2)
    lines.append("\t " + "".join(f"{left}{col:1d} {right}" for col in range(1, WIDTH + 1)))
    lines.append("")
    return "\n".join(lines)
