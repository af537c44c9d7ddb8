"""Shared fixtures: a fresh app per test with in-memory stores and cheap bcrypt."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from store.memory import InMemoryUserDirectory
from store.sessions import SessionStore


class FakeClock:
    """Manually advanced clock for session expiry tests."""

    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def settings():
    return Settings(BCRYPT_ROUNDS=4, SESSION_SECRET="test-secret")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def users():
    return InMemoryUserDirectory()


@pytest.fixture
def sessions(settings, clock):
    return SessionStore(max_age=settings.SESSION_MAX_AGE, clock=clock)


@pytest.fixture
def client(settings, users, sessions):
    app = create_app(settings, users=users, sessions=sessions)
    return TestClient(app)


def register(client, username="alice", password="s3cret"):
    return client.post("/api/register", json={"username": username, "password": password})


def login(client, username="alice", password="s3cret"):
    return client.post("/api/login", json={"username": username, "password": password})
