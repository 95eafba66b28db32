"""
mvcbasic — Mapping Conditions
===============================

What:  FastAPI dependencies that narrow a route beyond path and method.
Why:   Some endpoints only apply when a query parameter, header, request
       content type or acceptable response type matches.
How:   Each factory returns a dependency that raises HTTPException when the
       condition fails. Status codes follow the usual conventions:

    require_param      → 400 Bad Request
    require_header     → 404 Not Found
    consumes           → 415 Unsupported Media Type
    produces           → 406 Not Acceptable
"""

from typing import Callable

from fastapi import HTTPException, Request


def _media_type(value: str) -> str:
    return value.split(";")[0].strip().lower()


def _matches(accepted: str, offered: str) -> bool:
    if accepted in ("*/*", "*"):
        return True
    a_type, _, a_sub = accepted.partition("/")
    o_type, _, o_sub = offered.partition("/")
    return a_type == o_type and a_sub in ("*", o_sub)


def require_param(name: str, value: str) -> Callable[[Request], None]:
    """Route applies only when query parameter ``name`` equals ``value``."""

    def dependency(request: Request) -> None:
        if request.query_params.get(name) != value:
            raise HTTPException(
                status_code=400,
                detail=f"Parameter conditions \"{name}={value}\" not met",
            )

    return dependency


def require_header(name: str, value: str) -> Callable[[Request], None]:
    """Route applies only when header ``name`` equals ``value``."""

    def dependency(request: Request) -> None:
        if request.headers.get(name) != value:
            raise HTTPException(status_code=404, detail="Not Found")

    return dependency


def consumes(media_type: str) -> Callable[[Request], None]:
    """Route accepts only request bodies of ``media_type``."""

    def dependency(request: Request) -> None:
        content_type = _media_type(request.headers.get("content-type", ""))
        if not content_type or not _matches(media_type, content_type):
            raise HTTPException(
                status_code=415,
                detail=f"Content-Type '{content_type or 'none'}' is not supported",
            )

    return dependency


def produces(media_type: str) -> Callable[[Request], None]:
    """Route answers only clients that accept ``media_type``."""

    def dependency(request: Request) -> None:
        accept = request.headers.get("accept")
        if not accept:
            return
        ranges = [_media_type(part) for part in accept.split(",") if part.strip()]
        if not any(_matches(accepted, media_type) for accepted in ranges):
            raise HTTPException(status_code=406, detail="Not Acceptable")

    return dependency
