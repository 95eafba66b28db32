"""
mvcbasic — JSON Body Routes
=============================

What:  Binding a JSON request body to HelloData.

    v1  raw Request: read text, then parse it by hand
    v2  text body in, parse it by hand
    v3  HelloData bound directly from the body
    v4  HttpEntity[HelloData]
    v5  HelloData in, HelloData out (serialized back as JSON)

Errors (all 400):
    body is not JSON / not a JSON object   → MalformedBodyError
    "age": "notanumber"                   → TypeCoercionError
Unknown fields are ignored.
"""

import logging

from fastapi import APIRouter

from mvcbasic.core import body
from mvcbasic.core.body import BodyShape
from mvcbasic.core.handler import Body, Entity, HandlerSpec, RawRequest, Writer
from mvcbasic.core.render import BodyReturn, DirectWrite
from mvcbasic.schemas.hello import ErrorResponse, HelloData
from mvcbasic.web import mvc_route

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Request Body"],
    responses={400: {"description": "Request binding failed", "model": ErrorResponse}},
)


@mvc_route(
    router,
    "/request-body-json-v1",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={"request": RawRequest(), "response": Writer()},
        intent=DirectWrite(),
    ),
)
def request_body_json_v1(request, response):
    message_body = body.read_text(request)
    logger.info("messageBody=%s", message_body)

    hello_data = body.parse_json(message_body, HelloData)
    logger.info("username=%s, age=%d", hello_data.username, hello_data.age)

    response.write("ok")


@mvc_route(
    router,
    "/request-body-json-v2",
    methods=["POST"],
    spec=HandlerSpec(bindings={"message_body": Body()}, intent=BodyReturn()),
)
def request_body_json_v2(message_body):
    data = body.parse_json(message_body, HelloData)
    logger.info("username=%s, age=%d", data.username, data.age)
    return "ok"


@mvc_route(
    router,
    "/request-body-json-v3",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={"data": Body(BodyShape.JSON, HelloData)},
        intent=BodyReturn(),
    ),
)
def request_body_json_v3(data):
    logger.info("username=%s, age=%d", data.username, data.age)
    return "ok"


@mvc_route(
    router,
    "/request-body-json-v4",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={"http_entity": Entity(BodyShape.JSON, HelloData)},
        intent=BodyReturn(),
    ),
)
def request_body_json_v4(http_entity):
    data = http_entity.body
    logger.info("username=%s, age=%d", data.username, data.age)
    return "ok"


@mvc_route(
    router,
    "/request-body-json-v5",
    methods=["POST"],
    spec=HandlerSpec(
        bindings={"data": Body(BodyShape.JSON, HelloData)},
        intent=BodyReturn(),
    ),
)
def request_body_json_v5(data):
    logger.info("username=%s, age=%d", data.username, data.age)
    return data
