"""
Request ID and latency middleware.
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's ``X-Request-ID`` or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency; expose latency as ``X-Process-Time``."""

    def __init__(self, app, slow_request_ms: float = 1000.0):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        latency_ms = round((time.perf_counter() - started) * 1000, 2)

        request_id = getattr(request.state, "request_id", "unknown")
        logger.info(
            f"PERFORMANCE: method={request.method} path={request.url.path} "
            f"status={response.status_code} latency={latency_ms}ms request_id={request_id}"
        )
        if latency_ms > self.slow_request_ms:
            logger.warning(
                f"SLOW_REQUEST: method={request.method} path={request.url.path} latency={latency_ms}ms"
            )

        response.headers["X-Process-Time"] = str(latency_ms)
        return response
