"""
client.py - Play Yellow from the terminal against a remote server
"""

import socket
from typing import Callable, Optional

from connect4net.debug import debug
from connect4net.utils import Side, GameResult
from connect4net.game.session import GameSession
from connect4net.interfaces.terminal import TerminalPlayer
from connect4net.net.players import RemotePlayer, SendingPlayer


class GameClient:
    """Connects to a GameServer and plays one game."""

    def __init__(self, host: str, port: int,
                 input_func: Callable[[str], str] = input,
                 out: Callable[..., None] = print,
                 timeout: Optional[float] = None):
        self.host = host
        self.port = port
        self.input_func = input_func
        self.out = out
        self.timeout = timeout

    def play(self) -> GameResult:
        """
        Play a game over a fresh connection.

        Returns:
            The final result, IN_PROGRESS if either side stopped early

        Raises:
            ProtocolError: if the server sends an unplayable move
            OSError: if the connection fails
        """
        debug.info(f"Connecting to {self.host}:{self.port}", "client")
        with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
            human = TerminalPlayer(Side.YELLOW, self.input_func, self.out)
            session = GameSession(SendingPlayer(human, sock),
                                  RemotePlayer(Side.RED, sock, out=self.out),
                                  out=self.out)
            self.out("Welcome to connect-4 \n")
            result = session.run()

        debug.info(f"Game with {self.host}:{self.port} ended: {result.name}", "client")
        return result
