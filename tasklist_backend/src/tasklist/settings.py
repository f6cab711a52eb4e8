from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - PERSISTENCE_BACKEND: 'memory' (default) or 'sqlite'
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/tasklist.db'
    - STORAGE_KEY: key under which the todo collection blob is stored. Default 'todoAppData'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - NOTIFY_DISMISS_SECONDS: seconds before a notification hides itself (default: 3.0)
    - DATE_DISPLAY_FORMAT: strftime format for due dates in rendered rows (default: '%d/%m/%Y')
    - LOG_LEVEL: root log level name (default: INFO)
    """

    persistence_backend: str = "memory"
    sqlite_db_path: str = "./data/tasklist.db"
    storage_key: str = "todoAppData"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    notify_dismiss_seconds: float = 3.0
    date_display_format: str = "%d/%m/%Y"
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    backend = _get_env("PERSISTENCE_BACKEND", "memory").strip().lower()
    if backend not in {"memory", "sqlite"}:
        # Fallback to memory if unsupported
        backend = "memory"

    return Settings(
        persistence_backend=backend,
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/tasklist.db").strip(),
        storage_key=_get_env("STORAGE_KEY", "todoAppData").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        notify_dismiss_seconds=_parse_float(_get_env("NOTIFY_DISMISS_SECONDS", "3.0"), 3.0),
        date_display_format=_get_env("DATE_DISPLAY_FORMAT", "%d/%m/%Y"),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
    )
