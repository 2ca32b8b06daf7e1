"""Versioned game sessions for the web guide"""

from .exceptions import SessionNotFound
from .snapshot_store import GameSession, SessionRegistry, Snapshot

__all__ = [
    "Snapshot",
    "GameSession",
    "SessionRegistry",
    "SessionNotFound",
]
