from __future__ import annotations

import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from threading import RLock
from typing import Dict, Generator, List, Optional, Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from .models import TodoEntity
from .schemas import PersistedTodo
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

_COLLECTION = TypeAdapter(List[PersistedTodo])


# PUBLIC_INTERFACE
class BlobStore(ABC):
    """Abstract key-value contract for durable string blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous blob."""


class InMemoryBlobStore(BlobStore):
    """
    Thread-safe in-memory blob store suitable for testing and default runtime.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._lock = RLock()
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._blobs[key] = value


class SQLiteBlobStore(BlobStore):
    """
    Lightweight SQLite blob store: a single `blobs(key, value)` table.
    """

    def __init__(self, db_path: str) -> None:
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        self._db_path = db_path
        self._init_db()

    @contextmanager
    def _conn(self) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._conn() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS blobs (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._conn() as conn:
            row = conn.execute("SELECT value FROM blobs WHERE key = ?", (key,)).fetchone()
            return None if row is None else str(row[0])

    def set(self, key: str, value: str) -> None:
        with self._conn() as conn:
            conn.execute(
                "INSERT INTO blobs (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )


# PUBLIC_INTERFACE
def get_blob_store(settings: Optional[Settings] = None) -> BlobStore:
    """
    Factory to return the configured blob store based on settings.
    - memory: InMemoryBlobStore
    - sqlite: SQLiteBlobStore at settings.sqlite_db_path
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "sqlite":
        return SQLiteBlobStore(settings.sqlite_db_path)
    return InMemoryBlobStore()


# PUBLIC_INTERFACE
class TodoPersistence:
    """
    Serializes the whole todo collection to one JSON blob under a fixed key.

    The stored shape is a list of {id, text, status, dueDate, subtasks, expanded}
    objects with ISO dates; keys this version does not know are ignored on load.
    """

    def __init__(self, blob_store: BlobStore, key: str = "todoAppData") -> None:
        self._blobs = blob_store
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def save(self, todos: Sequence[TodoEntity]) -> None:
        records = [PersistedTodo.model_validate(t) for t in todos]
        payload = _COLLECTION.dump_json(records, by_alias=True).decode("utf-8")
        self._blobs.set(self._key, payload)
        logger.debug("Saved %d todos under key=%s", len(records), self._key)

    def load(self) -> List[TodoEntity]:
        """
        Return the stored collection, or an empty one if the key is absent or the
        blob is corrupt.
        """
        raw = self._blobs.get(self._key)
        if raw is None:
            return []
        try:
            records = _COLLECTION.validate_json(raw)
        except SchemaValidationError as exc:
            logger.warning("Discarding unreadable todo data under key=%s: %s", self._key, exc.title)
            return []
        logger.info("Loaded %d todos from key=%s", len(records), self._key)
        return [r.to_entity() for r in records]
