"""
Error envelopes and exception handlers.
Challenge: Every failure leaves the API as the same {error, message} JSON shape.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Empty search query"
NOTHING_FOUND_MESSAGE = "Nothing found"
BACKEND_ERROR_MESSAGE = "Search backend error"


class SearchBackendError(Exception):
    """Raised when the search backend fails to execute a query."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


def error_body(message: str) -> dict:
    """Error envelope returned to clients."""
    return {"error": True, "message": message}


async def search_backend_exception_handler(_request: Request, exc: SearchBackendError) -> JSONResponse:
    """Backend failures are unrecoverable for the request: 502 with the standard envelope."""
    logger.error("Search backend failure: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=error_body(BACKEND_ERROR_MESSAGE),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SearchBackendError, search_backend_exception_handler)
