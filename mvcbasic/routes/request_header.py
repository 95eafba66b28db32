"""
mvcbasic — Request Header Route
=================================

What:  ANY /headers logs what a handler can learn about the request beyond
       its parameters: method, locale, every header, one header, a cookie.
How:   ``host`` is looked up as "host"; the lookup is case-insensitive so the
       wire spelling ("Host") doesn't matter. The cookie is optional.
"""

import logging

from fastapi import APIRouter

from mvcbasic.core.handler import (
    Cookie,
    HandlerSpec,
    Header,
    HeaderMapping,
    Locale,
    Method,
    RawRequest,
)
from mvcbasic.core.render import BodyReturn
from mvcbasic.schemas.hello import ErrorResponse
from mvcbasic.web import mvc_route

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Request Headers"],
    responses={400: {"description": "Request binding failed", "model": ErrorResponse}},
)


@mvc_route(
    router,
    "/headers",
    spec=HandlerSpec(
        bindings={
            "request": RawRequest(),
            "http_method": Method(),
            "locale": Locale(),
            "header_map": HeaderMapping(),
            "host": Header("host"),
            "cookie": Cookie("myCookie", required=False),
        },
        intent=BodyReturn(),
    ),
)
def headers(request, http_method, locale, header_map, host, cookie):
    logger.info("request=%s %s", request.method, request.path)
    logger.info("httpMethod=%s", http_method)
    logger.info("locale=%s", locale)
    logger.info("headerMap=%s", header_map)
    logger.info("header host=%s", host)
    logger.info("myCookie=%s", cookie)

    return "ok"
