"""
Password hashing and session-cookie signing.

Both are delegated to audited libraries: bcrypt for the salted hash,
itsdangerous for the timestamped cookie signature. bcrypt is CPU-bound,
so the async wrappers push it onto a worker thread (asyncio.to_thread).
"""

import asyncio
from typing import Optional

import bcrypt
from itsdangerous import BadSignature, URLSafeTimedSerializer

# bcrypt only looks at the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


# ---------- Passwords ----------

def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def _hash_password_sync(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("ascii")


def _verify_password_sync(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        # Malformed stored hash or over-long password: never a match
        return False


async def hash_password(password: str, rounds: int = 10) -> str:
    return await asyncio.to_thread(_hash_password_sync, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison is bcrypt.checkpw's job, not ours."""
    return await asyncio.to_thread(_verify_password_sync, password, password_hash)


# ---------- Session cookie ----------

class CookieSigner:
    """
    Signs session tokens for the `sid` cookie.

    The signature embeds a timestamp, so a cookie older than max_age is
    rejected even if the browser keeps sending it.
    """

    def __init__(self, secret: str, max_age: int, salt: str = "quiz-session"):
        self._serializer = URLSafeTimedSerializer(secret, salt=salt)
        self.max_age = max_age

    def sign(self, token: str) -> str:
        return self._serializer.dumps(token)

    def unsign(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            token = self._serializer.loads(value, max_age=self.max_age)
        except BadSignature:
            # SignatureExpired is a BadSignature too
            return None
        return token if isinstance(token, str) else None
