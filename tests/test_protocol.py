"""Unit tests for connect4net/net/protocol.py and connect4net/net/players.py"""

import socket

import pytest

from connect4net.utils import Side, InvalidMoveError
from connect4net.game.rules import ConnectFourGame
from connect4net.net.players import RemotePlayer, SendingPlayer
from connect4net.net.protocol import ProtocolError, decode_move, encode_move, read_move, write_move


@pytest.fixture
def sockets():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    yield left, right
    left.close()
    right.close()


@pytest.mark.parametrize("data, column", [
    (b"4", 4),
    (b"1", 1),
    (b"7", 7),
    (b"  3", 3),
    (b"\t5\n", 5),
    (b"6abc", 6),
    (b"+2", 2),
    (b"07", 7),
    (b"3\x00\x00\x00", 3),
])
def test_decode_accepts_leading_integer(data, column):
    assert decode_move(data) == column


@pytest.mark.parametrize("data", [b"", b"abc", b" - 3", b"x4", b"0", b"8", b"-1", b"42"])
def test_decode_rejects_unplayable_input(data):
    with pytest.raises(InvalidMoveError):
        decode_move(data)


def test_encode_is_plain_decimal():
    assert encode_move(5) == b"5"
    with pytest.raises(InvalidMoveError):
        encode_move(0)


def test_read_and_write_over_socket(sockets):
    left, right = sockets
    write_move(left, 6)
    assert read_move(right) == 6


def test_read_returns_none_when_peer_closes(sockets):
    left, right = sockets
    left.close()
    assert read_move(right) is None


def test_read_raises_protocol_error_on_garbage(sockets):
    left, right = sockets
    left.sendall(b"hello")
    with pytest.raises(ProtocolError):
        read_move(right)


def test_remote_player_rejects_full_column(sockets):
    left, right = sockets
    game = ConnectFourGame()
    for i in range(6):
        game.play(2, Side.YELLOW if i % 2 == 0 else Side.RED)

    player = RemotePlayer(Side.RED, right)
    left.sendall(b"2")
    with pytest.raises(ProtocolError):
        player.next_move(game)


def test_remote_player_announces_move(sockets, output):
    left, right = sockets
    player = RemotePlayer(Side.RED, right, out=output)
    left.sendall(b"3")
    assert player.next_move(ConnectFourGame()) == 3
    assert output.text == "Ok, let's see now.... I play in column 3\n"


def test_sending_player_forwards_moves(sockets, scripted_player):
    left, right = sockets
    inner = scripted_player(Side.YELLOW, [4])
    player = SendingPlayer(inner, left)
    game = ConnectFourGame()

    assert player.side == Side.YELLOW
    assert player.next_move(game) == 4
    assert right.recv(255) == b"4"

    player.move_played(game, Side.YELLOW, 4)
    assert inner.seen == [(Side.YELLOW, 4)]

    # Nothing is sent once the wrapped player stops
    assert player.next_move(game) is None
