"""
Runtime configuration.

Every value is read from the process environment (or `.env`, loaded by
main.py) with a fixed fallback, e.g.:
  PORT=8080
  USER_STORE=mongo
  MONGO_URL=mongodb://db:27017/quizapp
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_ROOT = os.path.dirname(os.path.abspath(__file__))


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")

    # Server
    HOST: str = Field(default="0.0.0.0", description="Bind address")
    PORT: int = Field(default=3000, description="Listening port")
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    STATIC_DIR: str = Field(
        default=os.path.join(BACKEND_ROOT, "public"),
        description="Directory holding the single-page frontend",
    )

    # Sessions
    SESSION_SECRET: str = Field(default="change_this_secret", description="Cookie signing secret")
    SESSION_MAX_AGE: int = Field(default=60 * 60, description="Session lifetime in seconds")
    SESSION_COOKIE_NAME: str = Field(default="sid")

    # Users
    USER_STORE: Literal["memory", "mongo"] = Field(default="memory")
    MONGO_URL: str = Field(default="mongodb://localhost:27017/quizapp")
    MONGO_DB: str = Field(default="quizapp", description="Used when MONGO_URL names no database")
    LOGIN_SCORE_POLICY: Literal["restore", "reset"] = Field(
        default="restore",
        description="restore: login loads the stored score; reset: login starts at 0",
    )
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
