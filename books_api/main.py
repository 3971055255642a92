"""FastAPI application entrypoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from books_api.api.middleware import RequestLoggingMiddleware
from books_api.api.routes.books import router as books_router
from books_api.api.routes.health import router as health_router
from books_api.config.settings import Settings, get_settings
from books_api.core.exceptions import ServerStartupError
from books_api.logging.setup import configure_logging
from books_api.server import serve
from books_api.services.container import ServiceContainer


def create_app(settings: Settings | None = None, logger: Any | None = None) -> FastAPI:
    """Build the application with its router, middleware and logger wired in."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)
    container = ServiceContainer(settings, logger=logger)

    app = FastAPI(title=settings.app_name, version="1.0.0", redirect_slashes=False)
    app.state.container = container
    app.include_router(health_router)
    app.include_router(books_router)
    app.add_middleware(RequestLoggingMiddleware, logger=container.logger)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(_: Request, exc: Exception) -> JSONResponse:
        container.logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            },
        )

    return app


app = create_app()


def main() -> None:
    """Run the HTTP server; a failed bind ends the process with status 1."""
    container: ServiceContainer = app.state.container
    try:
        serve(app, container.settings, container.logger)
    except ServerStartupError as exc:
        container.logger.critical("server_failed", error=str(exc))
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
