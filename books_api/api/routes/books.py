"""Book resource routes.

The handlers are placeholders: they answer with fixed text and log the
call, nothing is stored.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse

from books_api.api.deps import get_logger

router = APIRouter(prefix="/v1/books", tags=["books"])


@router.get("", response_class=PlainTextResponse)
async def list_books(logger: Any = Depends(get_logger)) -> PlainTextResponse:
    response = PlainTextResponse("list of books (coming soon)\n", status_code=status.HTTP_200_OK)
    logger.info("list_books_handler_called")
    return response


@router.get("/{id}", response_class=PlainTextResponse)
async def get_book(id: str, logger: Any = Depends(get_logger)) -> PlainTextResponse:
    response = PlainTextResponse(f"get book with id: {id}\n", status_code=status.HTTP_200_OK)
    logger.info("get_book_handler_called", id=id)
    return response


@router.post("", response_class=PlainTextResponse, status_code=status.HTTP_201_CREATED)
async def create_book(logger: Any = Depends(get_logger)) -> PlainTextResponse:
    response = PlainTextResponse(
        "book created (coming soon)\n", status_code=status.HTTP_201_CREATED
    )
    logger.info("create_book_handler_called")
    return response


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_book(id: str, logger: Any = Depends(get_logger)) -> Response:
    # 204 must not carry a body.
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    logger.info("delete_book_handler_called", id=id)
    return response
