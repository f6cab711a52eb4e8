"""
Task list backend package.

Exposes the FastAPI application factory and a default app instance for
convenience imports (``from tasklist import app``).
"""

from .main import app, create_app  # noqa: F401
