"""
Access Logging Middleware

Logs one line per API request with its correlation id, status and duration.
"""

import time
import uuid
import logging
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

SKIPPED_PATHS = ["/", "/health", "/docs", "/openapi.json"]


class AccessLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log API access.

    Every response carries an X-Request-ID header; the same id appears in the
    log line, so a client report can be matched to the server log.
    """

    def __init__(self, app: ASGIApp, enabled: bool = True):
        """
        Args:
            app: FastAPI application
            enabled: Whether log lines are written (the header is always set)
        """
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - start_time) * 1000)

        response.headers["X-Request-ID"] = request_id

        if self.enabled and request.url.path not in SKIPPED_PATHS:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"in {duration_ms}ms [{request_id}] from {self._get_client_ip(request)}"
            )
        return response

    def _get_client_ip(self, request: Request) -> str:
        """
        Client IP, preferring the first X-Forwarded-For hop.
        """
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        if request.client:
            return request.client.host

        return "unknown"
