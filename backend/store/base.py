"""
User Directory interface.

Routes only ever talk to this interface; app.state.users holds whichever
implementation the settings selected (see store.build_user_directory).
"""

from abc import ABC, abstractmethod
from typing import Optional

from models.user import User


class UserDirectory(ABC):

    async def startup(self) -> None:
        """Open connections / ensure indexes. Called once from the app lifespan."""

    async def shutdown(self) -> None:
        """Release connections. Called once from the app lifespan."""

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create(self, username: str, password_hash: str) -> User:
        """Store a new user with score 0. Raises ConflictError on a taken username."""

    @abstractmethod
    async def update_score(self, user_id: str, score: int) -> None:
        ...
