"""
Persistence for users and sessions.

Sessions always live in process memory. Users live either in memory or in
MongoDB, chosen by the USER_STORE setting.
"""

from config import Settings
from store.base import UserDirectory
from store.memory import InMemoryUserDirectory
from store.sessions import SessionStore


def build_user_directory(settings: Settings) -> UserDirectory:
    if settings.USER_STORE == "mongo":
        # pymongo is only imported when selected
        from store.mongo import MongoUserDirectory
        return MongoUserDirectory.from_url(settings.MONGO_URL, default_db=settings.MONGO_DB)
    return InMemoryUserDirectory()


__all__ = ["UserDirectory", "InMemoryUserDirectory", "SessionStore", "build_user_directory"]
