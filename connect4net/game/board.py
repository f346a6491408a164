"""
board.py - Board representation and move engine for connect4net

This module implements the Board class which holds the cell state of a
7 x 6 board and provides the column-drop move engine: applying a move,
reverting it, and the column/board availability queries.

Columns are 1-based in every public method, matching the numbers shown in
the rendered legend and sent over the wire. Row 0 is the bottom row.
"""

from typing import List

import numpy as np

from connect4net.debug import debug
from connect4net.utils import (WIDTH, HEIGHT, Side, InvalidMoveError, InvalidStateError,
                               check_column, render_board_ascii)


class Board:
    """
    Represents a connect-4 game board.

    The only mutators are apply() and revert(); every other method is a
    read-only query.
    """

    def __init__(self):
        """Initialize an empty board."""
        self.grid = np.full((HEIGHT, WIDTH), Side.EMPTY.value, dtype=np.int8)

    @classmethod
    def from_position(cls, position: str) -> "Board":
        """
        Build a board from WIDTH * HEIGHT comma separated cell values.

        Values are listed bottom row first, left to right, using the Side
        values (0 empty, 1 red, 2 yellow).

        Raises:
            InvalidStateError: if the position is malformed or breaks the
                gravity invariant
        """
        try:
            values = [int(v) for v in position.split(',')]
        except ValueError as e:
            raise InvalidStateError(f"Position contains a non-numeric value: {e}") from e
        if len(values) != WIDTH * HEIGHT:
            raise InvalidStateError(f"Position must have {WIDTH * HEIGHT} values, got {len(values)}")
        if any(v not in (s.value for s in Side) for v in values):
            raise InvalidStateError("Position values must be 0, 1 or 2")

        board = cls()
        board.grid = np.array(values, dtype=np.int8).reshape(HEIGHT, WIDTH)
        if not board.satisfies_gravity():
            raise InvalidStateError("Position has an empty cell below an occupied one")
        return board

    def copy(self) -> "Board":
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        new_board = Board()
        new_board.grid = self.grid.copy()
        return new_board

    def is_column_full(self, column: int) -> bool:
        """Check whether the top slot of a column is occupied."""
        col = check_column(column)
        return self.grid[HEIGHT - 1, col] != Side.EMPTY.value

    def is_full(self) -> bool:
        """Check whether every column is full (no move possible)."""
        return bool(np.all(self.grid[HEIGHT - 1] != Side.EMPTY.value))

    def get_valid_columns(self) -> List[int]:
        """
        Get the columns that can still take a piece.

        Returns:
            List of 1-based column numbers, lowest first
        """
        return [col + 1 for col in range(WIDTH) if self.grid[HEIGHT - 1, col] == Side.EMPTY.value]

    def column_height(self, column: int) -> int:
        """Get the number of pieces in a column."""
        col = check_column(column)
        return int(np.count_nonzero(self.grid[:, col] != Side.EMPTY.value))

    def cell(self, row: int, column: int) -> Side:
        """Get the side occupying a cell (row 0 is the bottom, column is 1-based)."""
        col = check_column(column)
        if not 0 <= row < HEIGHT:
            raise InvalidMoveError(f"Row {row} is outside 0..{HEIGHT - 1}")
        return Side(int(self.grid[row, col]))

    def apply(self, column: int, side: Side) -> bool:
        """
        Drop a piece for side into the lowest empty slot of a column.

        Args:
            column: The column to play (1-based)
            side: Side.RED or Side.YELLOW

        Returns:
            True if the piece was placed, False if the column is full (the
            board is left unchanged)

        Raises:
            InvalidMoveError: if the column is out of range or side is EMPTY
        """
        col = check_column(column)
        if side not in (Side.RED, Side.YELLOW):
            raise InvalidMoveError(f"Cannot play a piece for {side!r}")

        for row in range(HEIGHT):
            if self.grid[row, col] == Side.EMPTY.value:
                self.grid[row, col] = side.value
                debug.trace(f"{side} placed at ({row}, {column})", "board")
                return True

        debug.debug(f"Column {column} is full", "board")
        return False

    def revert(self, column: int) -> bool:
        """
        Remove the topmost piece from a column.

        Raises:
            InvalidMoveError: if the column is out of range
            InvalidStateError: if the column holds no piece
        """
        col = check_column(column)
        for row in range(HEIGHT - 1, -1, -1):
            if self.grid[row, col] != Side.EMPTY.value:
                self.grid[row, col] = Side.EMPTY.value
                debug.trace(f"Removed piece at ({row}, {column})", "board")
                return True

        raise InvalidStateError(f"Cannot revert column {column}: it is empty")

    def satisfies_gravity(self) -> bool:
        """Check that no column has an empty slot below an occupied one."""
        occupied = self.grid != Side.EMPTY.value
        # Going up a column, occupancy may switch from True to False only once
        return not np.any(occupied[1:] & ~occupied[:-1])

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a numpy array.

        Returns:
            Copy of the grid, shape (HEIGHT, WIDTH), row 0 at the bottom
        """
        return self.grid.copy()

    def render(self) -> str:
        """Render the board as fixed-width text."""
        return render_board_ascii(self.grid)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __str__(self) -> str:
        return self.render()


def new_board() -> Board:
    """Create an empty board."""
    return Board()
