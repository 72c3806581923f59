# 🔐 musicrecs/infrastructure/session/__init__.py
"""🔐 Сесія: стан автентифікації та сталі сховища для неї."""

from .session_storage import FileSessionStorage, InMemorySessionStorage
from .session_store import ResetListener, SessionStore

__all__ = [
    "SessionStore",
    "ResetListener",
    "FileSessionStorage",
    "InMemorySessionStorage",
]
