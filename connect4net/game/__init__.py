"""
connect4net.game - Core game mechanics

This package contains the board representation, the move engine,
win detection and the session loop.
"""

from connect4net.game.board import Board, new_board
from connect4net.game.rules import ConnectFourGame, find_winner, get_result, winning_line

__all__ = ['Board', 'new_board', 'ConnectFourGame', 'find_winner', 'get_result', 'winning_line']
