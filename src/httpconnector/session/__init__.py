"""
Session tracking: typed per-client state plus the registry that finds it
again from the JSESSIONID cookie.
"""

from .session import AttributeKey, Session, generate_session_id
from .manager import SessionManager, SessionNotFound

__all__ = [
    "AttributeKey",
    "Session",
    "SessionManager",
    "SessionNotFound",
    "generate_session_id",
]
