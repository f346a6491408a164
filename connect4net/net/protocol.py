"""
protocol.py - Wire format for remote moves

A move travels as the ASCII decimal text of a 1-based column with no length
prefix or delimiter. The receiver takes whatever a single recv() returns and
parses it like C strtol(): leading whitespace, an optional sign, then digits;
anything after the digits is ignored. Strict move alternation keeps one move
per read, which keeps this format compatible with existing clients.
"""

import re
import socket
from typing import Optional

from connect4net.debug import debug
from connect4net.utils import READ_SIZE, Connect4Error, InvalidMoveError, check_column

_LEADING_INT = re.compile(rb"\s*([+-]?\d+)")


class ProtocolError(Connect4Error):
    """A remote peer sent something that cannot be played."""


def encode_move(column: int) -> bytes:
    """Encode a column for the wire, validating it first."""
    check_column(column)
    return str(int(column)).encode('ascii')


def decode_move(data: bytes) -> int:
    """
    Decode a column received from a peer.

    Raises:
        InvalidMoveError: if the data has no leading integer or the column
            is outside 1..WIDTH
    """
    match = _LEADING_INT.match(data)
    if match is None:
        raise InvalidMoveError(f"No column number in {data!r}")
    column = int(match.group(1))
    check_column(column)
    return column


def write_move(sock: socket.socket, column: int) -> None:
    """Send one move."""
    payload = encode_move(column)
    sock.sendall(payload)
    debug.trace(f"Sent {payload!r}", "protocol")


def read_move(sock: socket.socket) -> Optional[int]:
    """
    Read one move from the peer.

    Returns:
        The column, or None if the peer closed the connection

    Raises:
        ProtocolError: if the data received is not a playable column
    """
    data = sock.recv(READ_SIZE)
    if not data:
        return None
    debug.trace(f"Received {data!r}", "protocol")
    try:
        return decode_move(data)
    except InvalidMoveError as e:
        raise ProtocolError(str(e)) from e
