from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import EmptyError, NotFoundError, StoreError, ValidationError
from .logging_setup import setup_logging
from .notifications import Notifier
from .persistence import TodoPersistence, get_blob_store
from .routers import todos as todos_router
from .routers import view as view_router
from .settings import Settings, get_settings
from .store import TodoStore

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "Create, edit, toggle and delete todo items and their subtasks.",
    },
    {
        "name": "view",
        "description": "Sort, filter and search the displayed list; statistics and notifications.",
    },
]

_STATUS_BY_ERROR: Dict[Type[StoreError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    EmptyError: 409,
}


def _build_store(settings: Settings) -> TodoStore:
    persistence = TodoPersistence(get_blob_store(settings), key=settings.storage_key)
    return TodoStore(persistence, Notifier(dismiss_after=settings.notify_dismiss_seconds))


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, store: Optional[TodoStore] = None) -> FastAPI:
    """
    Build the FastAPI application around a TodoStore.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        store: Pre-built store (tests inject one); built from settings when omitted.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task List Backend",
        description="Todo list with subtasks, due dates, filtering, sorting, search and progress counters.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else _build_store(settings)

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": exc.errors(),
            },
        )

    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError) -> JSONResponse:
        """
        Map store errors to HTTP: ValidationError 422, NotFoundError 404, EmptyError 409.

        Response format:
            {"error": "<error class>", "message": "<user facing message>"}
        """
        status_code = 400
        for error_type, code in _STATUS_BY_ERROR.items():
            if isinstance(exc, error_type):
                status_code = code
                break
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "message": exc.message},
        )

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": settings.persistence_backend}

    app.include_router(todos_router.router)
    app.include_router(view_router.router)
    logger.info("Application ready backend=%s", settings.persistence_backend)
    return app


app = create_app()
