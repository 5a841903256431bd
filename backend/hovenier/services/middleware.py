"""Request timing and tracing middleware for the Hovenier quote API."""
import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("hovenier-api.middleware")

SKIP_LOG_PATHS = {"/health"}
QUOTE_STATE_FIELDS = ("quote_type", "scope_count", "line_count")


class RequestTimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    - Reuses the caller's X-Request-ID or assigns a new uuid4.
    - Adds X-Request-ID and X-Process-Time (ms) headers to every response.
    - Emits a structured log line per request, /health excluded, carrying the
      quote type and scope/line counts when the route recorded them.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        start_time = time.perf_counter()

        request.state.request_id = request_id

        response: Response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(duration_ms)

        if request.url.path not in SKIP_LOG_PATHS:
            extra = {
                "http_method": request.method,
                "http_path": request.url.path,
                "http_status": response.status_code,
                "request_id": request_id,
                "duration_ms": duration_ms,
            }
            extra.update(_quote_fields(request))
            logger.info("request completed", extra=extra)

        return response


def _quote_fields(request: Request) -> dict:
    """Quote context a route left on ``request.state`` (quote type, scope and line counts)."""
    fields = {}
    for name in QUOTE_STATE_FIELDS:
        value = getattr(request.state, name, None)
        if value is not None:
            fields[name] = value
    return fields
