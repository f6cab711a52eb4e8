# tests/conftest.py

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from tasklist.main import create_app
from tasklist.notifications import Notifier
from tasklist.persistence import InMemoryBlobStore, TodoPersistence
from tasklist.settings import Settings
from tasklist.store import TodoStore

from .fakes import FakeTimer

# Every test runs on a fixed "today" so due-date validation is deterministic.
TODAY = date(2030, 1, 15)


@pytest.fixture()
def blobs() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture()
def persistence(blobs: InMemoryBlobStore) -> TodoPersistence:
    return TodoPersistence(blobs)


@pytest.fixture()
def notifier() -> Notifier:
    FakeTimer.created.clear()
    return Notifier(dismiss_after=3.0, timer_factory=FakeTimer)


@pytest.fixture()
def store(persistence: TodoPersistence, notifier: Notifier) -> TodoStore:
    return TodoStore(persistence, notifier, clock=lambda: TODAY)


@pytest.fixture()
def client(store: TodoStore) -> TestClient:
    """
    TestClient over a fresh app per test, sharing the `store` fixture so tests
    can inspect canonical state directly.
    """
    app = create_app(Settings(), store=store)
    return TestClient(app)
