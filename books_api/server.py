"""Bind the listening socket and run uvicorn on it."""

from __future__ import annotations

import socket
from typing import Any

import uvicorn
from fastapi import FastAPI

from books_api.config.settings import Settings
from books_api.core.exceptions import ServerStartupError


def bind_socket(host: str, port: int) -> socket.socket:
    """Open a listening TCP socket, raising ``ServerStartupError`` on failure."""
    try:
        return socket.create_server((host, port))
    except OSError as exc:
        raise ServerStartupError(f"cannot listen on {host}:{port}: {exc}") from exc


def serve(app: FastAPI, settings: Settings, logger: Any) -> None:
    """Serve ``app`` until the process is stopped."""
    logger.info(
        "starting_server",
        addr=settings.bind_address,
        environment=settings.environment,
    )
    config = uvicorn.Config(
        app,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
    server = uvicorn.Server(config)
    sock = bind_socket(settings.api_host, settings.api_port)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
