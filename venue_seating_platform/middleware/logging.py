"""
Request/response logging middleware.
"""

import contextvars
import logging
import time
from typing import Dict, Optional
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# Context variable for request ID
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="no-request-id")

_QUIET_PATHS = {"/health", "/", "/docs", "/redoc", "/openapi.json"}
SLOW_REQUEST_THRESHOLD = 2.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """Assign a request id, log each request and its outcome."""

    def __init__(self, app, log_requests: bool = True, sensitive_headers: Optional[list] = None):
        super().__init__(app)
        self.log_requests = log_requests
        self.sensitive_headers = sensitive_headers or [
            "authorization", "cookie", "x-api-key"
        ]

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        start_time = time.perf_counter()
        level = logging.DEBUG if request.url.path in _QUIET_PATHS else logging.INFO

        if self.log_requests:
            logger.log(
                level,
                f"API request: {request.method} {request.url.path}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "client_ip": self._get_client_ip(request),
                    "headers": self._sanitize_headers(dict(request.headers)),
                }
            )

        try:
            response = await call_next(request)
        except Exception as exc:
            process_time = time.perf_counter() - start_time
            logger.error(
                f"Request exception: {type(exc).__name__}",
                extra={
                    "exception_type": type(exc).__name__,
                    "process_time": process_time,
                    "method": request.method,
                    "path": request.url.path,
                },
                exc_info=True
            )
            raise
        else:
            process_time = time.perf_counter() - start_time
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            if self.log_requests:
                self._log_response(request, response, process_time)
            return response
        finally:
            request_id_var.reset(token)

    def _log_response(self, request: Request, response: Response, process_time: float) -> None:
        info = {"status_code": response.status_code, "process_time": process_time}

        if response.status_code < 400:
            logger.info(f"Response: {response.status_code} ({process_time:.4f}s)", extra=info)
        elif response.status_code < 500:
            logger.warning(f"Client error: {response.status_code} ({process_time:.4f}s)", extra=info)
        else:
            logger.error(f"Server error: {response.status_code} ({process_time:.4f}s)", extra=info)

        if process_time > SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path} took {process_time:.4f}s",
                extra={"slow_request": True, "threshold": SLOW_REQUEST_THRESHOLD, **info}
            )

    def _get_client_ip(self, request: Request) -> str:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _sanitize_headers(self, headers: Dict[str, str]) -> Dict[str, str]:
        sanitized = {}
        for key, value in headers.items():
            if key.lower() not in self.sensitive_headers:
                sanitized[key] = value
            elif key.lower() == "authorization" and value.startswith("Bearer "):
                sanitized[key] = f"Bearer ***{value[-4:]}"
            else:
                sanitized[key] = "***MASKED***"
        return sanitized
