"""
In-process User Directory.

Handlers may run on worker threads, so every access to the maps goes
through one re-entrant lock.
"""

import threading
import uuid
from typing import Optional

from errors import ConflictError
from models.user import User
from store.base import UserDirectory


class InMemoryUserDirectory(UserDirectory):

    def __init__(self):
        self._users: dict[str, User] = {}       # username -> User
        self._ids: dict[str, str] = {}          # user id -> username
        self._lock = threading.RLock()

    async def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(username)
            return user.model_copy() if user else None

    async def create(self, username: str, password_hash: str) -> User:
        with self._lock:
            if username in self._users:
                raise ConflictError()
            user = User(id=uuid.uuid4().hex, username=username, password_hash=password_hash)
            self._users[username] = user
            self._ids[user.id] = username
            return user.model_copy()

    async def update_score(self, user_id: str, score: int) -> None:
        with self._lock:
            username = self._ids.get(user_id)
            if username is not None:
                self._users[username].score = score

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
