import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("app.requests")


class LoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request; server errors are logged as warnings."""

    async def dispatch(self, request: Request, call_next):
        start = time.monotonic()

        response = await call_next(request)

        elapsed_ms = (time.monotonic() - start) * 1000
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        client = request.client.host if request.client else "-"
        logger.log(
            level,
            "%s %s %s -> %s (%.1fms)",
            client,
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

        return response
