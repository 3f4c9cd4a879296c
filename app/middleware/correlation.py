"""
Request correlation and access logging.

Every request gets a correlation ID (taken from ``X-Request-ID`` when the
client sends one) that is attached to all log events emitted while the
request is handled and echoed back in ``X-Correlation-ID``.
"""
from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.logger import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


def _client_ip(request: Request) -> str:
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID and request fields to the logging context."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_correlation_id(correlation_id)
        structlog.contextvars.bind_contextvars(
            method=request.method,
            path=request.url.path,
            client_ip=_client_ip(request),
        )

        started = time.perf_counter()
        logger.info("request_started")
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "request_failed",
                error_type=type(exc).__name__,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        else:
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
        finally:
            structlog.contextvars.clear_contextvars()
            clear_correlation_id()
