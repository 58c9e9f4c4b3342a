"""
Persistence layer driving model lifecycle events.
"""

from .session import PersistenceError, Session

__all__ = ["PersistenceError", "Session"]
