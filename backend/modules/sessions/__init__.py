"""
Sessions module.

Server-side sessions persisted in the application database and referenced
by an HttpOnly cookie.

Public API:
- ISessionManager: Interface for session lifecycle
- SessionManager: Default implementation
- Session: Stored session row
"""

from .interfaces import ISessionManager, ISessionRepository
from .models import Session
from .service import SessionManager

__all__ = [
    "ISessionManager",
    "ISessionRepository",
    "Session",
    "SessionManager",
]
