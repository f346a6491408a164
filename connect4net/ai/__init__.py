"""
connect4net/ai/__init__.py - Move selection for the automated side
"""

from connect4net.ai.advisor import MoveAdvisor, choose

__all__ = ['MoveAdvisor', 'choose']
