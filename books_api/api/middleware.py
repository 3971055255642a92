"""HTTP middleware for request/response logging."""

from __future__ import annotations

import asyncio
import time
from typing import Any

from starlette.types import ASGIApp, Message, Receive, Scope, Send

DEFAULT_STATUS_CODE = 200
# Logged when the request is cancelled before a response starts.
CLIENT_CLOSED_STATUS_CODE = 499

_DURATION_UNITS = (
    ("µs", 1_000),
    ("ms", 1_000_000),
)


def format_duration(seconds: float) -> str:
    """Render elapsed time the way Go prints a ``time.Duration``.

    Sub-second values get one adaptive unit (``512.3µs``, ``1.5ms``); longer
    ones are split into hours, minutes and seconds (``1m30s``). Fractions are
    kept to three decimals and a value that rounds up to 1000 moves to the
    next unit.
    """
    nanos = round(seconds * 1_000_000_000)
    if nanos == 0:
        return "0s"
    if nanos < 1_000:
        return f"{nanos}ns"
    for unit, scale in _DURATION_UNITS:
        value = round(nanos / scale, 3)
        if value < 1_000:
            return f"{_trim(value)}{unit}"

    millis = round(nanos / 1_000_000)
    minutes, millis = divmod(millis, 60_000)
    hours, minutes = divmod(minutes, 60)
    text = f"{_trim(millis / 1_000)}s"
    if hours:
        return f"{hours}h{minutes}m{text}"
    if minutes:
        return f"{minutes}m{text}"
    return text


def _trim(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class StatusRecorder:
    """ASGI ``send`` wrapper that remembers the response status.

    Every message is forwarded unchanged. The status of the first
    ``http.response.start`` message is kept; until one is seen the
    recorded value stays at the default.
    """

    def __init__(self, send: Send, default_status: int = DEFAULT_STATUS_CODE) -> None:
        self._send = send
        self.status_code = default_status
        self.started = False

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start" and not self.started:
            self.started = True
            self.status_code = message["status"]
        await self._send(message)


class RequestLoggingMiddleware:
    """Emit one ``<METHOD> <PATH> <STATUS> <DURATION>`` line per HTTP request."""

    def __init__(self, app: ASGIApp, logger: Any) -> None:
        self.app = app
        self.logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = time.perf_counter()
        recorder = StatusRecorder(send)
        try:
            await self.app(scope, receive, recorder)
        except asyncio.CancelledError:
            if not recorder.started:
                recorder.status_code = CLIENT_CLOSED_STATUS_CODE
            raise
        except Exception:
            if not recorder.started:
                recorder.status_code = 500
            raise
        finally:
            self._log_request(scope, recorder.status_code, time.perf_counter() - started)

    def _log_request(self, scope: Scope, status_code: int, elapsed: float) -> None:
        method = scope["method"]
        path = scope["path"]
        self.logger.info(
            f"{method} {path} {status_code} {format_duration(elapsed)}",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=round(elapsed * 1000, 3),
        )
