"""
advisor.py - Move selection for the automated side

The advisor looks one ply ahead and plays, in order of preference:
1. a column that wins immediately
2. a column the opponent would win with on its next move (a block)
3. a random column that is not full

Every probe runs on a copy of the board, so the caller's board is never
modified.
"""

import random
from typing import Optional

from connect4net.debug import debug
from connect4net.utils import WIDTH, Side, InvalidStateError
from connect4net.game.board import Board
from connect4net.game.rules import find_winner


class MoveAdvisor:
    """Greedy win/block/random move chooser."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Args:
            seed: Seed for the advisor's private random generator
            rng: Generator to use instead (takes precedence over seed)
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.probes = 0  # For performance tracking
        self._timer = f"advisor_choose_{id(self)}"

    def find_winning_column(self, board: Board, side: Side) -> Optional[int]:
        """
        Find the lowest column in which side would complete a straight.

        Returns:
            1-based column number, or None
        """
        for column in range(1, WIDTH + 1):
            probe = board.copy()
            if not probe.apply(column, side):
                continue
            self.probes += 1
            if find_winner(probe) == side:
                return column
        return None

    def random_column(self, board: Board) -> int:
        """Pick uniformly among the columns that are not full."""
        columns = board.get_valid_columns()
        if not columns:
            raise InvalidStateError("No move possible: the board is full")
        return self.rng.choice(columns)

    def choose(self, board: Board, side: Side) -> int:
        """
        Choose a column for side.

        Returns:
            1-based column number that is guaranteed not to be full

        Raises:
            InvalidStateError: if the board is full
        """
        if board.is_full():
            raise InvalidStateError("No move possible: the board is full")

        self.probes = 0
        debug.start_timer(self._timer)

        column = self.find_winning_column(board, side)
        if column is not None:
            debug.debug(f"{side} wins in column {column}", "advisor")
        else:
            column = self.find_winning_column(board, side.other())
            if column is not None:
                debug.debug(f"{side} blocks {side.other()} in column {column}", "advisor")
            else:
                column = self.random_column(board)
                debug.debug(f"{side} plays random column {column}", "advisor")

        debug.end_timer(self._timer, "advisor")
        debug.trace(f"{self.probes} probes evaluated", "advisor")
        return column


def choose(board: Board, side: Side, advisor: Optional[MoveAdvisor] = None) -> int:
    """Choose a column for side with the given advisor (a fresh unseeded one by default)."""
    return (advisor or MoveAdvisor()).choose(board, side)
