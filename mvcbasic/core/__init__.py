"""Request binding and response rendering, independent of routing and transport."""

from mvcbasic.core.body import BodyShape, HttpEntity, decode, read_entity
from mvcbasic.core.headers import cookie, header, header_map
from mvcbasic.core.params import bind_model, coerce, extract, extract_all, parameter_map
from mvcbasic.core.render import (
    BodyReturn,
    DirectWrite,
    EntityWithStatus,
    Model,
    ModelAndView,
    PathAsView,
    RenderedOutput,
    Response,
    ResponseEntity,
    ResponseRenderer,
    ResponseWriter,
    ViewReturn,
)
from mvcbasic.core.request import HeaderMap, MultiValueDict, Request
from mvcbasic.core.handler import HandlerSpec, dispatch

__all__ = [
    "BodyReturn",
    "BodyShape",
    "DirectWrite",
    "EntityWithStatus",
    "HandlerSpec",
    "HeaderMap",
    "HttpEntity",
    "Model",
    "ModelAndView",
    "MultiValueDict",
    "PathAsView",
    "RenderedOutput",
    "Request",
    "Response",
    "ResponseEntity",
    "ResponseRenderer",
    "ResponseWriter",
    "ViewReturn",
    "bind_model",
    "coerce",
    "cookie",
    "decode",
    "dispatch",
    "extract",
    "extract_all",
    "header",
    "header_map",
    "parameter_map",
    "read_entity",
]
