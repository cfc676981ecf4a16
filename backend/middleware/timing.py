"""
Request Timing Middleware

Adds an X-Response-Time header to every response and logs requests
slower than SLOW_REQUEST_THRESHOLD_MS (overridable from the environment).

Usage:
    from backend.middleware.timing import TimingMiddleware
    app.add_middleware(TimingMiddleware)
"""

import logging
import os
import time
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("springyaml.timing")

DEFAULT_SLOW_REQUEST_THRESHOLD_MS = 500.0


def slow_request_threshold_ms() -> float:
    raw = os.getenv("SLOW_REQUEST_THRESHOLD_MS")
    if not raw:
        return DEFAULT_SLOW_REQUEST_THRESHOLD_MS
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_SLOW_REQUEST_THRESHOLD_MS


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware that adds timing headers and logs slow requests."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response: Response = await call_next(request)

        process_time_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Response-Time"] = f"{process_time_ms:.2f}ms"

        if process_time_ms >= slow_request_threshold_ms():
            logger.warning(
                f"Slow request: {request.method} {request.url.path} took {process_time_ms:.0f}ms"
            )

        return response
