"""
connect4net - Connect-4 engine with a scripted opponent, playable locally or over TCP

This package provides the board and move engine, the win detector,
the win/block/random move advisor, the session loop shared by every
front end, and a minimal text protocol for playing against a server.
"""

# Version number
__version__ = '0.1.0'
