"""
connect4net.interfaces - User interfaces

Terminal input for human players and the command-line front end.
"""

# Don't import anything here to avoid circular imports
__all__ = []
