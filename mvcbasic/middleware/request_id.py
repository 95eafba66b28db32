"""
mvcbasic — Request ID Middleware
==================================

What:  Assigns a short ID to each request and echoes it in X-Request-ID.
Why:   Binding and rendering error bodies carry the ID, so a client report
       can be matched to the log lines of that exact request.
How:   A client-supplied X-Request-ID is reused when it is a short token of
       letters, digits, "-", "_" or "."; anything else is replaced by a fresh
       ID. The ID lives in a ContextVar so exception handlers and loggers can
       read it without access to the request.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_TOKEN = re.compile(r"[A-Za-z0-9._-]{1,64}")

# coroutine-local: concurrent requests share a thread but not this value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def choose_request_id(supplied: str = "") -> str:
    """Reuse a well-formed client ID, otherwise generate an 8-char one."""
    if supplied and _TOKEN.fullmatch(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags every request and response with a correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER, ""))
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
