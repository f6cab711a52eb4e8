from __future__ import annotations

from fastapi import Request

from .settings import Settings
from .store import TodoStore


# PUBLIC_INTERFACE
def get_store(request: Request) -> TodoStore:
    """Return the TodoStore wired into the running application."""
    return request.app.state.store


# PUBLIC_INTERFACE
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
