"""
session_log.py - Per-session move log for network games

Each served connection appends its events to a shared text file, one line
per event. Several sessions may run at once, so every append is taken under
a file lock.
"""

import time
from typing import Optional

import filelock

from connect4net.debug import debug
from connect4net.utils import LOG_FILE, GameResult

SERVER_ADDRESS = "0.0.0.0"


def timestamp() -> str:
    """Current local time in asctime() format."""
    return time.asctime()


class SessionLog:
    """Appends connection and move events for one client session."""

    def __init__(self, peer_ip: str, socket_id: int, path: str = LOG_FILE):
        self.path = path
        self.peer_ip = peer_ip
        self.socket_id = socket_id
        self._lock = filelock.FileLock(f"{path}.lock")

    def _write(self, line: str) -> None:
        with self._lock:
            with open(self.path, 'a') as f:
                f.write(line + "\n")

    def _client_line(self, event: str) -> str:
        return f"[{timestamp()}] ({self.peer_ip}) (soc_id {self.socket_id}) {event}"

    def client_connected(self) -> None:
        self._write(self._client_line("client connected"))

    def client_move(self, column: int) -> None:
        self._write(self._client_line(f"client's move={column}"))

    def server_move(self, column: int) -> None:
        self._write(f"[{timestamp()}] ({SERVER_ADDRESS}) server's move={column}")

    def game_over(self, result: GameResult) -> None:
        self._write(self._client_line(f"game over: {result.name}"))

    def client_disconnected(self, reason: Optional[str] = None) -> None:
        event = "client disconnected"
        if reason:
            event += f": {reason}"
        self._write(self._client_line(event))
        debug.debug(f"Session log closed for {self.peer_ip}", "data")
