"""Unit tests for connect4net/debug.py"""

import socket

import pytest

from connect4net.debug import debug, DebugLevel
from connect4net.utils import Side
from connect4net.game.board import Board
from connect4net.net.protocol import write_move


@pytest.fixture
def debug_log(tmp_path):
    """Route log records to a file at TRACE level; returns a reader for it."""
    path = tmp_path / "debug.log"
    debug.configure(level=DebugLevel.TRACE, log_file=str(path))

    def _read():
        for handler in debug.logger.handlers:
            handler.flush()
        return path.read_text()

    yield _read
    debug.configure(level=DebugLevel.WARNING, log_file="", components=[])


def test_component_filter_keeps_only_listed_tags(debug_log):
    debug.configure(components=["protocol", "debug"])
    left, right = socket.socketpair()
    with left, right:
        write_move(left, 4)
    Board().apply(3, Side.RED)
    debug.end_timer("never_started")

    text = debug_log()
    assert "TRACE: [protocol] Sent b'4'" in text
    assert "[debug] Timer 'never_started' not started" in text
    assert "[board]" not in text


def test_empty_filter_logs_every_component(debug_log):
    Board().apply(3, Side.RED)
    debug.info("session note", "session")

    text = debug_log()
    assert "TRACE: [board] Red placed at (0, 3)" in text
    assert "[session] session note" in text


def test_none_level_silences_everything(debug_log):
    debug.configure(level=DebugLevel.NONE)
    debug.error("should not appear", "server")
    assert "should not appear" not in debug_log()


def test_set_from_string():
    try:
        debug.set_from_string("debug")
        assert debug.level == DebugLevel.DEBUG
        debug.set_from_string("bogus")
        assert debug.level == DebugLevel.DEBUG
    finally:
        debug.configure(level=DebugLevel.WARNING)


def test_timer_returns_elapsed_seconds():
    debug.start_timer("t")
    elapsed = debug.end_timer("t")
    assert elapsed is not None and elapsed >= 0
    assert debug.end_timer("t") is None
