"""Tests for the request logging middleware."""

import asyncio

import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from books_api.api.middleware import RequestLoggingMiddleware, StatusRecorder, format_duration
from books_api.config.settings import Settings
from books_api.main import create_app


class RecordingLogger:
    """Collects log calls instead of writing them."""

    def __init__(self) -> None:
        self.records: list[tuple[str, dict]] = []

    def info(self, event: str, **fields) -> None:
        self.records.append((event, fields))

    def exception(self, event: str, **fields) -> None:
        self.records.append((event, fields))

    def request_lines(self) -> list[tuple[str, dict]]:
        return [record for record in self.records if "status_code" in record[1]]


def _http_scope(method: str = "GET", path: str = "/") -> dict:
    return {"type": "http", "method": method, "path": path, "headers": []}


async def _receive() -> dict:
    return {"type": "http.request", "body": b"", "more_body": False}


async def _noop_send(message: dict) -> None:
    return None


def test_one_line_per_request_with_written_status() -> None:
    logger = RecordingLogger()
    client = TestClient(create_app(Settings(_env_file=None), logger=logger))

    client.post("/v1/books")

    lines = logger.request_lines()
    assert len(lines) == 1
    event, fields = lines[0]
    assert fields["status_code"] == 201
    assert fields["method"] == "POST"
    assert fields["path"] == "/v1/books"
    assert event.startswith("POST /v1/books 201 ")


def test_not_found_is_logged() -> None:
    logger = RecordingLogger()
    client = TestClient(create_app(Settings(_env_file=None), logger=logger))

    client.get("/v1/unknown")

    [(event, fields)] = logger.request_lines()
    assert fields["status_code"] == 404
    assert event.startswith("GET /v1/unknown 404 ")


def test_captures_status_set_by_handler() -> None:
    logger = RecordingLogger()
    app = FastAPI()

    @app.get("/accepted")
    async def accepted() -> Response:
        return Response(status_code=202)

    app.add_middleware(RequestLoggingMiddleware, logger=logger)
    response = TestClient(app).get("/accepted")

    assert response.status_code == 202
    assert logger.records[0][1]["status_code"] == 202


def test_status_defaults_to_200_when_never_set() -> None:
    logger = RecordingLogger()

    async def silent_app(scope, receive, send) -> None:
        return None

    middleware = RequestLoggingMiddleware(silent_app, logger=logger)
    asyncio.run(middleware(_http_scope(path="/quiet"), _receive, _noop_send))

    assert len(logger.records) == 1
    assert logger.records[0][1]["status_code"] == 200


def test_recorder_forwards_messages_and_keeps_first_status() -> None:
    sent: list[dict] = []

    async def send(message: dict) -> None:
        sent.append(message)

    recorder = StatusRecorder(send)
    assert recorder.status_code == 200

    async def run() -> None:
        await recorder({"type": "http.response.start", "status": 201, "headers": []})
        await recorder({"type": "http.response.body", "body": b"ok"})

    asyncio.run(run())

    assert recorder.status_code == 201
    assert [message["type"] for message in sent] == ["http.response.start", "http.response.body"]


def test_failure_is_logged_as_500_and_reraised() -> None:
    logger = RecordingLogger()

    async def broken_app(scope, receive, send) -> None:
        raise RuntimeError("boom")

    middleware = RequestLoggingMiddleware(broken_app, logger=logger)
    with pytest.raises(RuntimeError):
        asyncio.run(middleware(_http_scope(), _receive, _noop_send))

    assert logger.records[0][1]["status_code"] == 500


def test_cancelled_request_is_not_logged_as_success() -> None:
    logger = RecordingLogger()

    async def abandoned_app(scope, receive, send) -> None:
        raise asyncio.CancelledError

    middleware = RequestLoggingMiddleware(abandoned_app, logger=logger)
    with pytest.raises(asyncio.CancelledError):
        asyncio.run(middleware(_http_scope(), _receive, _noop_send))

    assert logger.records[0][1]["status_code"] == 499


def test_response_messages_pass_through_unchanged() -> None:
    logger = RecordingLogger()
    start = {
        "type": "http.response.start",
        "status": 201,
        "headers": [(b"content-type", b"text/plain"), (b"x-book", b"42")],
    }
    body = {"type": "http.response.body", "body": b"book created\n", "more_body": False}
    sent: list[dict] = []

    async def app(scope, receive, send) -> None:
        await send(start)
        await send(body)

    async def send(message: dict) -> None:
        sent.append(message)

    middleware = RequestLoggingMiddleware(app, logger=logger)
    asyncio.run(middleware(_http_scope(method="POST", path="/v1/books"), _receive, send))

    assert sent == [start, body]
    assert sent[0] is start
    assert sent[1] is body
    assert logger.records[0][1]["status_code"] == 201


def test_non_http_scope_passes_through() -> None:
    logger = RecordingLogger()
    seen: list[str] = []

    async def app(scope, receive, send) -> None:
        seen.append(scope["type"])

    middleware = RequestLoggingMiddleware(app, logger=logger)
    asyncio.run(middleware({"type": "lifespan"}, _receive, _noop_send))

    assert seen == ["lifespan"]
    assert logger.records == []


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0, "0s"),
        (250e-9, "250ns"),
        (42e-6, "42µs"),
        (512.3e-6, "512.3µs"),
        (1.5e-3, "1.5ms"),
        (2.0, "2s"),
        (3.25, "3.25s"),
        (90, "1m30s"),
        (3600, "1h0m0s"),
        (0.9999999, "1s"),
        (999.9999e-6, "1ms"),
    ],
)
def test_format_duration(seconds: float, expected: str) -> None:
    assert format_duration(seconds) == expected
