"""
mvcbasic — Response View Routes
=================================

What:  Server-rendered HTML through the "response/hello" template.

    v1  return ModelAndView("response/hello") with data="hello!"
    v2  fill the Model, return the view name
    v3  /response/hello declares nothing; the path itself is used as the
        view name. Kept for compatibility only: a warning is logged on every
        call, and renaming the URL silently changes the view.
"""

from fastapi import APIRouter

from mvcbasic.core.handler import HandlerSpec, ModelArg
from mvcbasic.core.render import ModelAndView, PathAsView, ViewReturn
from mvcbasic.schemas.hello import ErrorResponse
from mvcbasic.web import mvc_route

router = APIRouter(
    tags=["Response View"],
    responses={404: {"description": "View not found", "model": ErrorResponse}},
)


@mvc_route(router, "/response-view-v1", spec=HandlerSpec(intent=ViewReturn()))
def response_view_v1():
    mav = ModelAndView("response/hello").add_object("data", "hello!")
    return mav


@mvc_route(
    router,
    "/response-view-v2",
    spec=HandlerSpec(bindings={"model": ModelArg()}, intent=ViewReturn()),
)
def response_view_v2(model):
    model.add_attribute("data", "hello!!")
    return "response/hello"


@mvc_route(
    router,
    "/response/hello",
    spec=HandlerSpec(bindings={"model": ModelArg()}, intent=PathAsView()),
)
def response_view_v3(model):
    model.add_attribute("data", "hello!!")
