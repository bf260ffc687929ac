"""
Error taxonomy and the HTTP error boundary for the invoices service.

Route handlers and services only raise. The mapping from error kind to HTTP
status and body happens in one place: register_error_handlers().

Kinds:
- InvalidRequest: malformed or missing input (file count, orderBy, enum values) -> 400
- NotFound: the requested resource does not exist -> 404
- InvalidState: internal inconsistency (e.g. unmappable MIME type) -> 500
- Unhandled: anything else -> 500, message never leaked
"""

import logging
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Closed set of error kinds surfaced by the API."""

    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNHANDLED = "internal_error"


ERROR_STATUS_CODES = {
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.UNHANDLED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class InvoiceServiceError(Exception):
    """Base class for errors with a known kind."""

    kind: ErrorKind = ErrorKind.UNHANDLED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def http_status(self) -> int:
        return ERROR_STATUS_CODES[self.kind]

    def to_response(self) -> dict:
        return {"error": self.kind.value, "details": self.message}


class InvalidRequestError(InvoiceServiceError):
    kind = ErrorKind.INVALID_REQUEST


class NotFoundError(InvoiceServiceError):
    kind = ErrorKind.NOT_FOUND


class InvalidStateError(InvoiceServiceError):
    kind = ErrorKind.INVALID_STATE


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(InvoiceServiceError)
    async def invoice_service_error_handler(request: Request, exc: InvoiceServiceError):
        if exc.http_status >= 500:
            logger.error(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
        else:
            logger.warning(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")

        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Schema validation failures are client errors like any other InvalidRequest."""
        logger.warning(
            f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
        )

        return JSONResponse(
            status_code=ERROR_STATUS_CODES[ErrorKind.INVALID_REQUEST],
            content={
                "error": ErrorKind.INVALID_REQUEST.value,
                "details": "Invalid request data",
                "errors": [
                    {
                        "field": ".".join(str(loc) for loc in e["loc"]),
                        "message": e["msg"],
                        "type": e["type"],
                    }
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )

        return JSONResponse(
            status_code=ERROR_STATUS_CODES[ErrorKind.UNHANDLED],
            content={
                "error": ErrorKind.UNHANDLED.value,
                "details": "An unexpected error occurred",
            },
        )
