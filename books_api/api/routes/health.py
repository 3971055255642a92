"""Health check route."""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse

from books_api.api.deps import get_logger

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/healthcheck", response_class=PlainTextResponse)
async def healthcheck(logger: Any = Depends(get_logger)) -> PlainTextResponse:
    """Liveness endpoint."""
    response = PlainTextResponse("status: available\n", status_code=status.HTTP_200_OK)
    logger.info("healthcheck_handler_called")
    return response
