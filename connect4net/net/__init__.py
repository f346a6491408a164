"""
connect4net.net - TCP transport

Server and client for playing against the advisor over a socket,
using the unframed decimal move format in protocol.py.
"""

# Don't import anything here to avoid circular imports
__all__ = []
