"""
mvcbasic — Starlette Bridge
=============================

What:  Connects the framework-agnostic core to FastAPI/Starlette.
Why:   FastAPI owns routing and transport; the core owns binding and
       rendering. This module is the only place that knows both.
How:   to_core_request() reads the Starlette request to completion and builds
       an immutable core Request. to_starlette_response() writes a core
       Response through the renderer. mvc_route() registers a handler with
       its HandlerSpec on an APIRouter.

Usage:
    router = APIRouter()

    @mvc_route(router, "/request-param-v2", spec=HandlerSpec(...))
    def request_param_v2(username, age):
        ...
"""

import logging
from typing import Any, Callable, Iterable, Optional

from fastapi import APIRouter
from starlette.requests import Request as StarletteRequest
from starlette.responses import Response as StarletteResponse

from mvcbasic.core.handler import HandlerSpec, dispatch
from mvcbasic.core.render import ResponseRenderer, Response, renderer as default_renderer
from mvcbasic.core.request import Request

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def to_core_request(request: StarletteRequest) -> Request:
    """Snapshot a Starlette request as a core Request (body fully read)."""
    body = await request.body()
    raw_headers = [
        (name.decode("latin-1"), value.decode("latin-1"))
        for name, value in request.headers.raw
    ]
    return Request.build(
        method=request.method,
        path=request.url.path,
        query_string=request.url.query,
        headers=raw_headers,
        body=body,
    )


def to_starlette_response(
    response: Response, renderer: Optional[ResponseRenderer] = None
) -> StarletteResponse:
    """Render a core Response into a Starlette response."""
    output = (renderer or default_renderer).write(response)
    result = StarletteResponse(content=output.body, status_code=output.status)
    for name, value in output.headers:
        result.headers.append(name, value)
    return result


def mvc_route(
    router: APIRouter,
    path: str,
    spec: HandlerSpec,
    methods: Optional[Iterable[str]] = None,
    renderer: Optional[ResponseRenderer] = None,
    **route_kwargs: Any,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Register ``func`` at ``path``; its arguments come from ``spec``.

    Without ``methods`` every HTTP method is accepted. The decorated function
    is returned unchanged so it stays callable in tests.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        async def endpoint(request: StarletteRequest) -> StarletteResponse:
            request.state.render_intent = type(spec.intent).__name__
            core_request = await to_core_request(request)
            response = dispatch(spec, func, core_request, renderer=renderer)
            return to_starlette_response(response, renderer=renderer)

        endpoint.__name__ = func.__name__
        endpoint.__doc__ = func.__doc__
        router.add_api_route(
            path,
            endpoint,
            methods=list(methods or ALL_METHODS),
            **route_kwargs,
        )
        return func

    return decorator
