"""
Error handling for the Venue Seating Platform.

Typed ``SeatingError``s are rendered by a registered exception handler; the
middleware catches everything that escapes the routers (database failures,
integrity violations, bugs) and turns it into the same JSON error envelope.
"""

import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as SQLTimeoutError

from ..utils.exceptions import (
    SeatingError,
    ErrorCode,
    ValidationError,
    NotFoundError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    ExternalServiceError,
)

logger = logging.getLogger(__name__)


def status_code_for(exc: SeatingError) -> int:
    """Map an error kind to its HTTP status code."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, InvalidStateError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, ValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, ExternalServiceError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(exc: SeatingError, error_id: str) -> Dict[str, Any]:
    return {
        "error": exc.to_dict(),
        "error_id": error_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def seating_error_handler(request: Request, exc: SeatingError) -> JSONResponse:
    """Render a typed seating error."""
    error_id = str(uuid4())
    status_code = status_code_for(exc)

    log = logger.warning if status_code < 500 else logger.error
    log(
        f"Client error [{error_id}]: {exc.message}" if status_code < 500
        else f"System error [{error_id}]: {exc.message}",
        extra={
            "error_id": error_id,
            "error_code": exc.error_code.value,
            "method": request.method,
            "path": request.url.path,
            "details": exc.details,
        }
    )

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=status_code, content=error_body(exc, error_id), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SeatingError, seating_error_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch-all for exceptions no router handled."""

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc, str(uuid4()))

    def _handle_exception(self, request: Request, exc: Exception, error_id: str) -> JSONResponse:
        if isinstance(exc, SeatingError):
            return JSONResponse(status_code=status_code_for(exc), content=error_body(exc, error_id))

        if isinstance(exc, IntegrityError):
            logger.warning(
                f"Integrity error [{error_id}]: {exc.orig}",
                extra={"error_id": error_id, "path": request.url.path}
            )
            error = SeatingError(
                "Data integrity constraint violation",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"constraint_type": _constraint_type(str(exc.orig))},
            )
            return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body(error, error_id))

        if isinstance(exc, (OperationalError, SQLTimeoutError)):
            logger.error(
                f"Database error [{error_id}]: {exc}",
                extra={"error_id": error_id, "path": request.url.path}
            )
            error = ExternalServiceError(
                "database",
                "Database service temporarily unavailable",
                details={"error_type": type(exc).__name__},
            )
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content=error_body(error, error_id),
                headers={"Retry-After": "30"}
            )

        logger.error(
            f"Unexpected error [{error_id}]: {exc}",
            extra={"error_id": error_id, "error_type": type(exc).__name__, "path": request.url.path},
            exc_info=True
        )
        error = SeatingError(
            "An unexpected error occurred",
            error_code=ErrorCode.INTERNAL_ERROR,
            details={"error_type": type(exc).__name__} if self.debug else None,
        )
        body = error_body(error, error_id)
        if self.debug:
            body["debug"] = {"exception": str(exc), "traceback": traceback.format_exc()}
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)


def _constraint_type(message: str) -> str:
    lowered = message.lower()
    if "unique" in lowered or "duplicate key" in lowered:
        return "unique"
    if "foreign key" in lowered:
        return "foreign_key"
    if "not null" in lowered:
        return "not_null"
    return "unknown"
