"""
connect4net.data - Per-session log of network games
"""

from connect4net.data.session_log import SessionLog

__all__ = ['SessionLog']
