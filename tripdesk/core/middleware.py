# tripdesk/core/middleware.py
"""
Core middleware and exception handler registration for the FastAPI application.

This module provides request tracking, timing and error logging, plus the
handlers that render application exceptions with the standard error
envelope.
"""
from __future__ import annotations

import time
import uuid
from typing import Any, Callable, Dict, List, Sequence

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from tripdesk.core.constants import HEADER_PROCESS_TIME, HEADER_REQUEST_ID
from tripdesk.core.exceptions import BaseAppException, ServerError, ValidationError
from tripdesk.core.logging import get_logger, request_id as request_id_ctx

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The request ID is:
    - Stored in request.state.request_id and the logging context
    - Added to response headers as X-Request-ID
    """

    def __init__(self, app: ASGIApp, header_name: str = HEADER_REQUEST_ID):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse an upstream request ID when one is supplied
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[self.header_name] = request_id
        return response


def _request_line(request: Request) -> Dict[str, Any]:
    """Fields shared by every per-request log line; the request id is added by the log filter."""
    return {"method": request.method, "path": request.url.path}


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Measure request duration and report it in the X-Process-Time header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        response.headers[HEADER_PROCESS_TIME] = f"{elapsed:.4f}"
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} in {elapsed:.4f}s",
            extra={**_request_line(request), "status_code": response.status_code},
        )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log error responses, and exceptions that escape the route handlers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception(
                f"Request processing failed: {exc}",
                extra={**_request_line(request), "error_type": type(exc).__name__},
            )
            raise

        if response.status_code >= 500:
            logger.error(f"Request failed with status {response.status_code}", extra=_request_line(request))
        elif response.status_code >= 400:
            logger.warning(f"Request rejected with status {response.status_code}", extra=_request_line(request))
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register the request tracking middlewares on the application.

    The last middleware added sees the request first, so the request ID is
    bound before timing and error logging run.
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    logger.info("Core middlewares registered", extra={"count": 3})


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _format_loc(loc: Sequence[Any]) -> str:
    """('body', 'itinerary', 0, 'day') -> 'itinerary[0].day'"""
    parts: List[str] = []
    for part in loc:
        if part in ("body", "query", "path", "header") and not parts:
            continue
        if isinstance(part, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{part}]"
            else:
                parts.append(f"[{part}]")
        else:
            parts.append(str(part))
    return ".".join(parts) or "body"


def _field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field_errors.setdefault(_format_loc(error.get("loc", ())), []).append(error.get("msg", "Invalid value"))
    return field_errors


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", extra={"error_code": exc.error_code.value})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationError("Validation failed", field_errors=_field_errors(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error: {exc}")
    error = ServerError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure with the standard error envelope."""
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "register_exception_handlers",
]
