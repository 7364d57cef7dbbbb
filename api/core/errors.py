"""
Error taxonomy and global exception handlers.

Every response leaving the API is an envelope:
- success: {"status": "success", "result": ...}
- client error (4xx): {"status": "fail", "message": "..."}
- server error (5xx): {"status": "error", "message": "..."}

Handlers registered here make sure no exception escapes as a bare stack trace.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class QuoteApiError(RuntimeError):
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict[str, Any]:
        return error_envelope(self.http_status, self.message)


class QuoteNotFoundError(QuoteApiError):
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, quote_id: int):
        super().__init__(f"Quote with ID: {quote_id} not found")
        self.quote_id = quote_id


class QuoteConflictError(QuoteApiError):
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Quote already exists"):
        super().__init__(message)


class StorageError(QuoteApiError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR


class DataIntegrityError(QuoteApiError):
    """
    A stored row is missing a field the API always writes.
    """

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, quote_id: Any, field: str):
        super().__init__(f"Quote with ID: {quote_id} is missing required field '{field}'")
        self.quote_id = quote_id
        self.field = field


def error_envelope(http_status: int, message: str) -> dict[str, Any]:
    return {"status": "fail" if http_status < 500 else "error", "message": message}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(QuoteApiError)
    async def quote_api_error_handler(request: Request, exc: QuoteApiError):
        if exc.http_status >= 500:
            logger.error("request_failed path=%s error=%s", request.url.path, exc.message)
        else:
            logger.info("request_rejected path=%s status=%s", request.url.path, exc.http_status)
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("validation_error path=%s errors=%s", request.url.path, exc.errors())
        content = error_envelope(status.HTTP_400_BAD_REQUEST, "Invalid request data")
        content["errors"] = [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ]
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception path=%s error=%s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"),
        )
