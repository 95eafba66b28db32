"""
mvcbasic — Request Parameter Routes
=====================================

What:  Reading query-string and url-encoded form parameters.
Why:   ``?username=hello&age=20`` and a posted HTML form with the same fields
       are read the same way; the handler never knows which one it got.
How:   v1 works on the raw Request and writes the body itself. Every later
       version declares its parameters in a HandlerSpec and returns "ok".

Try it:
    /request-param-v2?username=hello&age=20
    /request-param-default?username=       → username falls back to "guest"
    /basic/hello-form.html                 → posts to /request-param-v1
"""

import logging

from fastapi import APIRouter

from mvcbasic.core import params
from mvcbasic.core.handler import (
    HandlerSpec,
    ModelAttribute,
    Param,
    ParamMap,
    RawRequest,
    Writer,
)
from mvcbasic.core.render import BodyReturn, DirectWrite
from mvcbasic.schemas.hello import ErrorResponse, HelloData
from mvcbasic.web import mvc_route

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Request Parameters"],
    responses={400: {"description": "Request binding failed", "model": ErrorResponse}},
)


@mvc_route(
    router,
    "/request-param-v1",
    spec=HandlerSpec(
        bindings={"request": RawRequest(), "response": Writer()},
        intent=DirectWrite(),
    ),
)
def request_param_v1(request, response):
    username = params.extract(request, "username")
    age = params.coerce(params.extract(request, "age"), int, "age")
    logger.info("username=%s, age=%d", username, age)

    response.write("ok")


@mvc_route(
    router,
    "/request-param-v2",
    spec=HandlerSpec(
        bindings={
            "member_name": Param("username"),
            "member_age": Param("age", type=int),
        },
        intent=BodyReturn(),
    ),
)
def request_param_v2(member_name, member_age):
    logger.info("username=%s, age=%d", member_name, member_age)
    return "ok"


@mvc_route(
    router,
    "/request-param-v3",
    spec=HandlerSpec(
        bindings={"username": Param("username"), "age": Param("age", type=int)},
        intent=BodyReturn(),
    ),
)
def request_param_v3(username, age):
    logger.info("username=%s, age=%d", username, age)
    return "ok"


@mvc_route(
    router,
    "/request-param-v4",
    spec=HandlerSpec(
        bindings={
            "username": Param("username", required=False),
            "age": Param("age", type=int, required=False),
        },
        intent=BodyReturn(),
    ),
)
def request_param_v4(username, age):
    logger.info("username=%s, age=%s", username, age)
    return "ok"


@mvc_route(
    router,
    "/request-param-required",
    spec=HandlerSpec(
        bindings={
            "username": Param("username", required=True),
            "age": Param("age", type=int, required=False),
        },
        intent=BodyReturn(),
    ),
)
def request_param_required(username, age):
    """
    ``username`` must be present; ``?username=`` counts as present (empty).
    ``age`` may be omitted and is then None.
    """
    logger.info("username=%s, age=%s", username, age)
    return "ok"


@mvc_route(
    router,
    "/request-param-default",
    spec=HandlerSpec(
        bindings={
            "username": Param("username", default="guest"),
            "age": Param("age", type=int, required=False, default=-1),
        },
        intent=BodyReturn(),
    ),
)
def request_param_default(username, age):
    """Defaults also replace empty values."""
    logger.info("username=%s, age=%d", username, age)
    return "ok"


@mvc_route(
    router,
    "/request-param-map",
    spec=HandlerSpec(bindings={"param_map": ParamMap()}, intent=BodyReturn()),
)
def request_param_map(param_map):
    logger.info("username=%s, age=%s", param_map.get("username"), param_map.get("age"))
    return "ok"


@mvc_route(
    router,
    "/request-param-multi",
    spec=HandlerSpec(bindings={"param_map": ParamMap(multi=True)}, intent=BodyReturn()),
)
def request_param_multi(param_map):
    """?tag=a&tag=b → {"tag": ["a", "b"]}."""
    logger.info("paramMap=%s", param_map)
    return param_map.to_dict()


@mvc_route(
    router,
    "/model-attribute-v1",
    spec=HandlerSpec(bindings={"hello_data": ModelAttribute(HelloData)}, intent=BodyReturn()),
)
def model_attribute_v1(hello_data):
    logger.info("username=%s, age=%d", hello_data.username, hello_data.age)
    logger.info("helloData=%s", hello_data)
    return "ok"


@mvc_route(
    router,
    "/model-attribute-v2",
    spec=HandlerSpec(bindings={"hello_data": ModelAttribute(HelloData)}, intent=BodyReturn()),
)
def model_attribute_v2(hello_data):
    """Same binding, record echoed back as JSON."""
    logger.info("username=%s, age=%d", hello_data.username, hello_data.age)
    return hello_data
