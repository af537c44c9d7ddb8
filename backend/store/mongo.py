"""
MongoDB-backed User Directory.

Documents live in the `users` collection:
  {_id: ObjectId, username: str, passwordHash: str, score: int}

pymongo is blocking, so each call runs via asyncio.to_thread. The unique
index on `username` is created at startup; it turns a registration race into
a DuplicateKeyError, which surfaces as ConflictError.
"""

import asyncio
import logging
from typing import Optional

from bson import ObjectId
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from errors import ConflictError, InternalError
from models.user import User
from store.base import UserDirectory

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


def _to_user(doc: dict) -> User:
    return User(
        id=str(doc["_id"]),
        username=doc["username"],
        password_hash=doc["passwordHash"],
        score=doc.get("score", 0),
    )


class MongoUserDirectory(UserDirectory):

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self._collection = collection
        self._client = client       # owned client, closed on shutdown

    @classmethod
    def from_url(cls, url: str, default_db: str = "quizapp") -> "MongoUserDirectory":
        # MongoClient connects lazily; nothing touches the network here
        client = MongoClient(url)
        db = client.get_default_database(default=default_db)
        return cls(db[USERS_COLLECTION], client=client)

    # ---------- Lifecycle ----------

    def _ensure_indexes(self) -> None:
        self._collection.create_index("username", unique=True)

    async def startup(self) -> None:
        try:
            await asyncio.to_thread(self._ensure_indexes)
        except PyMongoError:
            # Keep serving; requests needing the store will fail with 500
            logger.exception("MongoDB connection error")
            return
        logger.info("MongoDB connected (collection %r)", self._collection.full_name)

    async def shutdown(self) -> None:
        if self._client is not None:
            await asyncio.to_thread(self._client.close)

    # ---------- Queries ----------

    def _find_sync(self, username: str) -> Optional[User]:
        doc = self._collection.find_one({"username": username})
        return _to_user(doc) if doc else None

    def _create_sync(self, username: str, password_hash: str) -> User:
        if self._collection.find_one({"username": username}, {"_id": 1}):
            raise ConflictError()
        doc = {"username": username, "passwordHash": password_hash, "score": 0}
        try:
            result = self._collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError()
        doc["_id"] = result.inserted_id
        return _to_user(doc)

    def _update_score_sync(self, user_id: str, score: int) -> None:
        self._collection.update_one({"_id": ObjectId(user_id)}, {"$set": {"score": score}})

    async def _run(self, func, *args):
        """Run a blocking query; driver failures surface as InternalError."""
        try:
            return await asyncio.to_thread(func, *args)
        except PyMongoError as exc:
            logger.exception("MongoDB query failed")
            raise InternalError() from exc

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._run(self._find_sync, username)

    async def create(self, username: str, password_hash: str) -> User:
        return await self._run(self._create_sync, username, password_hash)

    async def update_score(self, user_id: str, score: int) -> None:
        await self._run(self._update_score_sync, user_id, score)
