"""
terminal.py - Human player reading moves from the terminal
"""

from typing import Callable, Optional

from connect4net.debug import debug
from connect4net.utils import WIDTH, Side, InvalidStateError
from connect4net.game.rules import ConnectFourGame
from connect4net.game.session import Player

PROMPT = "Enter column number: "

# Commands recognised in place of a column number
QUIT = 'q'
UNDO = 'u'


def parse_column(text: str) -> Optional[int]:
    """Parse a column typed by the user, None if it is not a number in 1..WIDTH."""
    try:
        column = int(text.strip())
    except ValueError:
        return None
    if 1 <= column <= WIDTH:
        return column
    return None


class TerminalPlayer(Player):
    """
    Prompts until a playable column is entered.

    End of input or 'q' ends the session. When allow_undo is set, 'u' takes
    back the last move of each side so the human can replay.
    """

    def __init__(self, side: Side, input_func: Callable[[str], str] = input,
                 out: Callable[..., None] = print, allow_undo: bool = False):
        super().__init__(side)
        self.input_func = input_func
        self.out = out
        self.allow_undo = allow_undo

    def _undo(self, game: ConnectFourGame) -> None:
        # Take back moves until it is this side's turn again
        try:
            while True:
                side, _ = game.undo_move()
                if side == self.side:
                    break
        except InvalidStateError:
            self.out("No moves to undo.")
            return
        self.out("Move undone.")
        self.out(game.render())

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        prompt = PROMPT
        while True:
            try:
                text = self.input_func(prompt)
            except EOFError:
                debug.info("End of input", "terminal")
                return None

            command = text.strip().lower()
            if command == QUIT:
                return None
            if command == UNDO and self.allow_undo:
                self._undo(game)
                prompt = PROMPT
                continue

            column = parse_column(text)
            if column is not None and not game.board.is_column_full(column):
                return column

            debug.debug(f"Rejected input {text!r}", "terminal")
            prompt = "That move is not possible. " + PROMPT
