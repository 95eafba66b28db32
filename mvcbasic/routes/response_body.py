"""
mvcbasic — Response Body Routes
=================================

What:  Writing the HTTP message body directly, with no view involved.

    string-v1  write to the response writer
    string-v2  ResponseEntity("ok", 200)
    string-v3  return "ok"
    json-v1    ResponseEntity(HelloData, 200) → JSON
    json-v2    return HelloData, status fixed on the intent → JSON

ResponseEntity is the one to reach for when the status depends on the
outcome; a fixed BodyReturn status can't change per request.
"""

from fastapi import APIRouter

from mvcbasic.core.handler import HandlerSpec, Writer
from mvcbasic.core.render import BodyReturn, DirectWrite, EntityWithStatus, ResponseEntity
from mvcbasic.schemas.hello import HelloData
from mvcbasic.web import mvc_route

router = APIRouter(tags=["Response Body"])


@mvc_route(
    router,
    "/response-body-string-v1",
    methods=["GET"],
    spec=HandlerSpec(bindings={"response": Writer()}, intent=DirectWrite()),
)
def response_body_v1(response):
    response.write("ok")


@mvc_route(
    router,
    "/response-body-string-v2",
    methods=["GET"],
    spec=HandlerSpec(intent=EntityWithStatus()),
)
def response_body_v2():
    return ResponseEntity("ok", status=200)


@mvc_route(
    router,
    "/response-body-string-v3",
    methods=["GET"],
    spec=HandlerSpec(intent=BodyReturn()),
)
def response_body_v3():
    return "ok"


@mvc_route(
    router,
    "/response-body-json-v1",
    methods=["GET"],
    spec=HandlerSpec(intent=EntityWithStatus()),
)
def response_body_json_v1():
    hello_data = HelloData(username="userA", age=20)
    return ResponseEntity(hello_data, status=200)


@mvc_route(
    router,
    "/response-body-json-v2",
    methods=["GET"],
    spec=HandlerSpec(intent=BodyReturn(status=200)),
)
def response_body_json_v2():
    hello_data = HelloData(username="userA", age=20)
    return hello_data
