"""Request context middleware — request id and access log.

Learn: every request gets an id, either from the incoming X-Request-ID
header (so a frontend or proxy can correlate) or a fresh UUID. The id is
bound to structlog's contextvars, so every log line emitted while handling
the request carries it, and it is echoed back in the response header.

One `http.request` line is logged per request with method, path, status
and duration. Headers, cookies and bodies are never logged: they carry
credentials.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=elapsed_ms,
        )
        return response
