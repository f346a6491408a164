"""
rules.py - Win detection and game state management for connect4net

This module provides:
1. The exhaustive win scan used both on real boards and on the advisor's
   hypothetical boards
2. ConnectFourGame, which owns a board together with its move history
"""

from typing import List, Optional, Tuple

from connect4net.debug import debug
from connect4net.utils import (WIDTH, HEIGHT, Side, GameResult, InvalidMoveError,
                               InvalidStateError, find_straight_at)
from connect4net.game.board import Board


def winning_line(board: Board) -> List[Tuple[int, int]]:
    """
    Find the first straight on the board.

    Cells are scanned in row-major order from the bottom-left corner, so
    when several straights exist the one starting at the lowest row, then
    the lowest column, is reported.

    Returns:
        List of (row, col) grid positions (0-based), or an empty list
    """
    grid = board.grid
    for row in range(HEIGHT):
        for col in range(WIDTH):
            line = find_straight_at(grid, row, col)
            if line:
                return line
    return []


def find_winner(board: Board) -> Optional[Side]:
    """
    Find the side that has four in a row anywhere on the board.

    Returns:
        The winning side, or None
    """
    line = winning_line(board)
    if not line:
        return None
    row, col = line[0]
    return Side(int(board.grid[row, col]))


def get_result(board: Board) -> GameResult:
    """Derive the game result from the board."""
    winner = find_winner(board)
    if winner is not None:
        return GameResult.win_for(winner)
    if board.is_full():
        return GameResult.DRAW
    return GameResult.IN_PROGRESS


class ConnectFourGame:
    """
    High-level game manager.

    Wraps a Board with the list of moves played so far, so that session
    loops can validate input, undo moves and query the result without
    touching the grid directly.
    """

    def __init__(self):
        """Initialize a new game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()
        self.history: List[Tuple[Side, int]] = []

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board = Board()
        self.history = []

    def play(self, column: int, side: Side) -> bool:
        """
        Play a move for side.

        Returns:
            True if the piece was placed, False if the column is full

        Raises:
            InvalidMoveError: if the column is out of range, the side is
                invalid or the game is already over
        """
        if self.is_game_over():
            raise InvalidMoveError(f"Game is over ({self.get_result().name})")

        if not self.board.apply(column, side):
            return False

        self.history.append((side, column))
        debug.debug(f"Move {len(self.history)}: {side} in column {column}", "game")
        return True

    def undo_move(self) -> Tuple[Side, int]:
        """
        Undo the last move.

        Returns:
            The (side, column) pair that was taken back

        Raises:
            InvalidStateError: if no move has been played
        """
        if not self.history:
            raise InvalidStateError("No moves to undo")

        side, column = self.history.pop()
        self.board.revert(column)
        debug.debug(f"Undid {side} in column {column}", "game")
        return side, column

    def get_result(self) -> GameResult:
        return get_result(self.board)

    def is_game_over(self) -> bool:
        return self.get_result().is_game_over()

    def get_winner(self) -> Optional[Side]:
        return find_winner(self.board)

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_columns()

    def render(self) -> str:
        return self.board.render()
