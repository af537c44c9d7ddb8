from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    token: str
    user_id: str
    username: str
    score: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    expires_at: datetime

    @classmethod
    def open(cls, token: str, user_id: str, username: str, score: int,
             max_age: int, now: Optional[datetime] = None) -> "Session":
        now = now or utcnow()
        return cls(
            token=token,
            user_id=user_id,
            username=username,
            score=score,
            created_at=now,
            expires_at=now + timedelta(seconds=max_age),
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at
