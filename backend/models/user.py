from typing import Optional
from pydantic import BaseModel


class User(BaseModel):
    id: str
    username: str
    password_hash: str
    score: int = 0          # last submitted score, restored on login when configured


class Credentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
