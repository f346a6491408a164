"""
session.py - The turn loop shared by local play, the server and the client

A GameSession alternates between two players, Yellow first, applying each
move to its own ConnectFourGame, rendering the board and stopping on a win,
a draw or when a player has no further move (end of input or quit).
"""

import time
from typing import Callable, Optional

from connect4net.debug import debug
from connect4net.utils import Side, GameResult, InvalidMoveError, THINK_DELAY
from connect4net.ai.advisor import MoveAdvisor
from connect4net.game.rules import ConnectFourGame

OUTCOME_MESSAGES = {
    GameResult.YELLOW_WIN: "Ok, you beat me, beginner's luck!",
    GameResult.RED_WIN: "I guess I have your measure!",
    GameResult.DRAW: "An honourable draw",
}


class Player:
    """Source of moves for one side of a session."""

    def __init__(self, side: Side):
        self.side = side

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        """
        Return the 1-based column to play, or None to end the session.
        """
        raise NotImplementedError

    def move_played(self, game: ConnectFourGame, side: Side, column: int) -> None:
        """Called after any move has been applied to the game."""


class AdvisorPlayer(Player):
    """Plays the advisor's choice, pretending to think for a moment."""

    def __init__(self, side: Side, advisor: Optional[MoveAdvisor] = None,
                 delay: float = THINK_DELAY, out: Optional[Callable[..., None]] = print):
        super().__init__(side)
        self.advisor = advisor or MoveAdvisor()
        self.delay = delay
        self.out = out

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        column = self.advisor.choose(game.board, self.side)
        if self.out is not None:
            self.out("Ok, let's see now....", end="", flush=True)
        if self.delay > 0:
            time.sleep(self.delay)
        if self.out is not None:
            self.out(f" I play in column {column}")
        return column


class GameSession:
    """Runs one game between two players on a board of its own."""

    def __init__(self, yellow: Player, red: Player,
                 out: Optional[Callable[..., None]] = print,
                 game: Optional[ConnectFourGame] = None,
                 on_move: Optional[Callable[[Side, int], None]] = None):
        if yellow.side != Side.YELLOW or red.side != Side.RED:
            raise ValueError("Players must be given as (yellow, red)")
        self.players = (yellow, red)
        self.out = out
        self.game = game or ConnectFourGame()
        self.on_move = on_move

    def _show(self, *args, **kwargs) -> None:
        if self.out is not None:
            self.out(*args, **kwargs)

    def play_turn(self, player: Player) -> Optional[GameResult]:
        """
        Ask player for a move and apply it.

        Returns:
            The game result after the move, or None if the player ended the
            session

        Raises:
            InvalidMoveError: if the player returned a column that cannot
                be played
        """
        column = player.next_move(self.game)
        if column is None:
            debug.info(f"{player.side} ended the session", "session")
            return None

        if not self.game.play(column, player.side):
            raise InvalidMoveError(f"{player.side} played into full column {column}")

        for p in self.players:
            p.move_played(self.game, player.side, column)
        if self.on_move is not None:
            self.on_move(player.side, column)

        self._show(self.game.render())
        return self.game.get_result()

    def run(self) -> GameResult:
        """
        Play until the game is over or a player stops.

        Returns:
            The final result, IN_PROGRESS if the session ended early
        """
        self._show(self.game.render())
        debug.info("Session started", "session")

        result = self.game.get_result()
        while not result.is_game_over():
            for player in self.players:
                turn_result = self.play_turn(player)
                if turn_result is None:
                    return result
                result = turn_result
                if result.is_game_over():
                    break

        self._show(OUTCOME_MESSAGES[result])
        debug.info(f"Session finished: {result.name} after {len(self.game.history)} moves", "session")
        return result
