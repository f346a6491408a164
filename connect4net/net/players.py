"""
players.py - Session players backed by a socket

RemotePlayer takes its moves from the peer; SendingPlayer wraps a local
player and forwards each of its moves to the peer before it is applied.
"""

import socket
from typing import Callable, Optional

from connect4net.debug import debug
from connect4net.utils import Side
from connect4net.game.rules import ConnectFourGame
from connect4net.game.session import Player
from connect4net.net.protocol import ProtocolError, read_move, write_move


class RemotePlayer(Player):
    """Reads the moves of one side from a connected peer."""

    def __init__(self, side: Side, sock: socket.socket,
                 out: Optional[Callable[..., None]] = None):
        super().__init__(side)
        self.sock = sock
        self.out = out

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        column = read_move(self.sock)
        if column is None:
            debug.info(f"Peer playing {self.side} closed the connection", "net")
            return None
        if game.board.is_column_full(column):
            raise ProtocolError(f"Peer played into full column {column}")

        if self.out is not None:
            self.out("Ok, let's see now....", end="")
            self.out(f" I play in column {column}")
        return column


class SendingPlayer(Player):
    """Forwards the moves of a local player to the peer."""

    def __init__(self, player: Player, sock: socket.socket):
        super().__init__(player.side)
        self.player = player
        self.sock = sock

    def next_move(self, game: ConnectFourGame) -> Optional[int]:
        column = self.player.next_move(game)
        if column is not None:
            write_move(self.sock, column)
        return column

    def move_played(self, game: ConnectFourGame, side: Side, column: int) -> None:
        self.player.move_played(game, side, column)
