"""
Element Alchemy Sessions.

Per-player game sessions: serialized actions, persistence, notifications.
"""

from src.session.game_session import GameSession, open_session

__all__ = ["GameSession", "open_session"]
