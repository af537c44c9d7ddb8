"""
Server-side session store.

Maps an opaque token (carried, signed, in the `sid` cookie) to a Session.
Sessions expire a fixed time after creation; expired entries are dropped
lazily on lookup and in bulk by purge_expired().
"""

import secrets
import threading
from datetime import datetime
from typing import Callable, Optional

from models.session import Session, utcnow
from models.user import User


class SessionStore:

    def __init__(self, max_age: int, clock: Callable[[], datetime] = utcnow):
        self.max_age = max_age
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.RLock()

    def create(self, user: User, score: int = 0) -> Session:
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        session = Session.open(
            token=token,
            user_id=user.id,
            username=user.username,
            score=score,
            max_age=self.max_age,
            now=self._clock(),
        )
        with self._lock:
            self._sessions[token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self._clock()):
                del self._sessions[token]
                return None
            return session

    def record_score(self, token: str, score: int) -> None:
        with self._lock:
            session = self._sessions.get(token)
            if session is not None:
                session.score = score

    def destroy(self, token: Optional[str]) -> bool:
        """Returns whether a session was removed. Unknown tokens are fine."""
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
