"""
Request logging middleware.
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware

from ...utils.logging import get_logger

logger = get_logger("booking.http")


def _session_id(path: str):
    parts = path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "sessions":
        return parts[1]
    return None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and latency."""

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        path = request.url.path
        try:
            resp = await call_next(request)
        except Exception:
            logger.exception(f"{request.method} {path} failed")
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {path} {resp.status_code} {elapsed_ms:.1f}ms",
            extra={"session_id": _session_id(path)},
        )
        return resp
