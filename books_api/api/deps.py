"""FastAPI dependencies."""

from typing import Any

from fastapi import Request

from books_api.services.container import ServiceContainer


def get_container(request: Request) -> ServiceContainer:
    """Return application-level service container."""
    return request.app.state.container


def get_logger(request: Request) -> Any:
    """Provide the shared logger handle."""
    return get_container(request).logger
