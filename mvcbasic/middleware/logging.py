"""
mvcbasic — Request Logging Middleware
=======================================

What:  One access-log line per request: method, path, status, how the body
       was produced, content type, duration.
How:   Controllers registered through mvc_route leave their render intent on
       ``request.state.render_intent`` (DirectWrite, BodyReturn, ViewReturn,
       ...); plain FastAPI routes and static files show "-". Level follows the
       status class: 5xx → ERROR, 4xx → WARNING, everything else → INFO.

What we log vs what we don't:
    Log: method, path, status, render intent, content type, duration, request ID
    Don't log: bodies, cookies, header values (handlers log what they bind)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mvcbasic.middleware.request_id import request_id_var

logger = logging.getLogger("mvcbasic.access")


def status_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with its status, render intent and content type."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        intent = getattr(request.state, "render_intent", "-")
        content_type = response.headers.get("content-type", "-")
        rid = request_id_var.get("")

        logger.log(
            status_level(response.status_code),
            "%s %s %d %s %s %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            intent,
            content_type,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "render_intent": intent,
                "content_type": content_type,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
