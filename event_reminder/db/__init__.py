"""Database models and session management."""

from .models import Base, Setting
from .session import close_db, get_session, init_db

__all__ = [
    "Base",
    "Setting",
    "close_db",
    "get_session",
    "init_db",
]
