"""
server.py - Game server: the advisor plays Red against remote Yellow players

Every accepted connection gets its own thread, board and advisor. The
client moves first; the server answers each move with the advisor's column
until the game ends or the client disconnects.
"""

import socket
import threading
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from connect4net.debug import debug
from connect4net.utils import (DEFAULT_HOST, DEFAULT_PORT, LOG_FILE, RSEED, THINK_DELAY,
                               Side, GameResult, InvalidMoveError)
from connect4net.ai.advisor import MoveAdvisor
from connect4net.data.session_log import SessionLog
from connect4net.game.session import AdvisorPlayer, GameSession
from connect4net.net.players import RemotePlayer, SendingPlayer
from connect4net.net.protocol import ProtocolError

# Results of the most recent sessions, oldest dropped first
RESULTS_KEPT = 100


class GameServer:
    """Accepts clients and runs one independent game per connection."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 seed: Optional[int] = RSEED, delay: float = THINK_DELAY,
                 log_file: str = LOG_FILE, out: Optional[Callable[..., None]] = print,
                 backlog: int = 5):
        self.host = host
        self.port = port
        self.seed = seed
        self.delay = delay
        self.log_file = log_file
        self.out = out
        self.backlog = backlog
        self._sock: Optional[socket.socket] = None
        self._threads: List[threading.Thread] = []
        self._stopping = threading.Event()
        self.results: Deque[Optional[GameResult]] = deque(maxlen=RESULTS_KEPT)

    @property
    def address(self) -> Tuple[str, int]:
        if self._sock is None:
            raise RuntimeError("Server is not bound")
        return self._sock.getsockname()[:2]

    def bind(self) -> Tuple[str, int]:
        """Create the listening socket and return the bound address."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(self.backlog)
        except OSError:
            sock.close()
            raise
        self._sock = sock
        debug.info(f"Listening on {self.address[0]}:{self.address[1]}", "server")
        return self.address

    def handle_connection(self, conn: socket.socket, addr) -> Optional[GameResult]:
        """
        Play one game over an accepted connection.

        The connection is closed on every path, including a session log that
        cannot be written.

        Returns:
            The game result, or None if the session failed
        """
        peer_ip = addr[0]
        with conn:
            try:
                log = SessionLog(peer_ip, conn.fileno(), self.log_file)
                log.client_connected()
                debug.info(f"Client {peer_ip} connected (soc_id {conn.fileno()})", "server")
                return self._play(conn, peer_ip, log)
            except OSError as e:
                debug.error(f"Session with {peer_ip} failed: {e}", "server")
                return None

    def _play(self, conn: socket.socket, peer_ip: str, log: SessionLog) -> Optional[GameResult]:
        def record(side: Side, column: int) -> None:
            if side == Side.YELLOW:
                log.client_move(column)
            else:
                log.server_move(column)

        advisor = AdvisorPlayer(Side.RED, MoveAdvisor(self.seed), self.delay, self.out)
        session = GameSession(RemotePlayer(Side.YELLOW, conn), SendingPlayer(advisor, conn),
                              out=self.out, on_move=record)
        try:
            result = session.run()
        except (ProtocolError, InvalidMoveError) as e:
            debug.warning(f"Protocol error from {peer_ip}: {e}", "server")
            log.client_disconnected(f"protocol error: {e}")
            return None
        except OSError as e:
            debug.error(f"Connection to {peer_ip} failed: {e}", "server")
            log.client_disconnected(f"connection error: {e}")
            return None

        if result.is_game_over():
            log.game_over(result)
        else:
            log.client_disconnected()
        debug.info(f"Session with {peer_ip} ended: {result.name}", "server")
        return result

    def _serve_client(self, conn: socket.socket, addr) -> None:
        # Appended from several session threads at once
        self.results.append(self.handle_connection(conn, addr))

    def serve_forever(self, once: bool = False) -> None:
        """
        Accept connections until shutdown() is called.

        Args:
            once: Serve a single game in the calling thread, then return
        """
        if self._sock is None:
            self.bind()

        while not self._stopping.is_set():
            sock = self._sock
            if sock is None:
                break
            try:
                conn, addr = sock.accept()
            except OSError:
                if self._stopping.is_set():
                    break
                raise

            if once:
                self._serve_client(conn, addr)
                break

            thread = threading.Thread(target=self._serve_client, args=(conn, addr),
                                      name=f"session-{addr[0]}:{addr[1]}", daemon=True)
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
            thread.start()

        self.close()

    def shutdown(self, timeout: Optional[float] = None) -> None:
        """Stop accepting connections and wait for running sessions."""
        self._stopping.set()
        self.close()
        for thread in self._threads:
            thread.join(timeout)

    def close(self) -> None:
        sock, self._sock = self._sock, None
        if sock is not None:
            # shutdown() wakes a thread blocked in accept() on Linux
            try:
                sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            sock.close()
            debug.info("Server socket closed", "server")
