"""
mvcbasic — Text Body Routes
=============================

What:  Reading a plain-text request body, from most manual to most declarative.

    v1  raw Request, decode the body by hand, write "ok" to the response
    v2  body stream + response writer
    v3  HttpEntity in, ResponseEntity out
    v4  decoded body string in, return value out

Text bodies are not parameters: a JSON or text body never shows up in
/request-param-* handlers, and a form body is better read as parameters.
"""

import logging

from fastapi import APIRouter

from mvcbasic.core import body
from mvcbasic.core.handler import Body, BodyStream, Charset, Entity, HandlerSpec, RawRequest, Writer
from mvcbasic.core.render import BodyReturn, DirectWrite, EntityWithStatus, ResponseEntity
from mvcbasic.schemas.hello import ErrorResponse
from mvcbasic.web import mvc_route

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Request Body"],
    responses={400: {"description": "Request binding failed", "model": ErrorResponse}},
)


@mvc_route(
    router,
    "/request-body-string-v1",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={"request": RawRequest(), "response": Writer()},
        intent=DirectWrite(),
    ),
)
def request_body_string_v1(request, response):
    message_body = body.read_text(request)
    logger.info("messageBody=%s", message_body)

    response.write("ok")


@mvc_route(
    router,
    "/request-body-string-v2",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={
            "input_stream": BodyStream(),
            "charset": Charset(),
            "response_writer": Writer(),
        },
        intent=DirectWrite(),
    ),
)
def request_body_string_v2(input_stream, charset, response_writer):
    message_body = input_stream.read().decode(charset, errors="replace")
    logger.info("messageBody=%s", message_body)

    response_writer.write("ok")


@mvc_route(
    router,
    "/request-body-string-v3",
    methods=["POST"],
    spec=HandlerSpec(bindings={"http_entity": Entity()}, intent=EntityWithStatus()),
)
def request_body_string_v3(http_entity):
    message_body = http_entity.body
    logger.info("messageBody=%s", message_body)

    return ResponseEntity("ok")


@mvc_route(
    router,
    "/request-body-string-v4",
    methods=["POST"],
    spec=HandlerSpec(bindings={"message_body": Body()}, intent=BodyReturn()),
)
def request_body_string_v4(message_body):
    logger.info("messageBody=%s", message_body)
    return "ok"
