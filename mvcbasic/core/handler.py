"""
mvcbasic — Handler Descriptors and Dispatch
=============================================

What:  Explicit description of how a handler gets its arguments and how its
       result is rendered.
Why:   Each handler states, argument by argument, which part of the request
       feeds it. Nothing is inferred from signatures or annotations.
How:   HandlerSpec maps argument names to Binding descriptors and carries one
       render intent. dispatch() binds every argument first (so binding
       errors happen before the handler runs), calls the handler, and passes
       the result to the ResponseRenderer.

Example:
    spec = HandlerSpec(
        bindings={
            "username": Param("username"),
            "age": Param("age", type=int, required=False, default=-1),
        },
        intent=BodyReturn(),
    )
    response = dispatch(spec, handler, request)
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Union

from mvcbasic.core import body, headers, params
from mvcbasic.core.render import (
    Model,
    PathAsView,
    RenderIntent,
    Response,
    ResponseRenderer,
    ResponseWriter,
    renderer as default_renderer,
)
from mvcbasic.core.request import Request

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Binding descriptors
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Param:
    """One query/form parameter, converted to ``type``."""

    name: str
    type: Any = str
    required: bool = True
    default: Any = None


@dataclass(frozen=True)
class ParamMap:
    """All parameters: first values as a dict, or the full multimap."""

    multi: bool = False


@dataclass(frozen=True)
class ModelAttribute:
    """A record assembled from same-named parameters."""

    model: Any


@dataclass(frozen=True)
class Body:
    """The request body decoded as text or JSON."""

    shape: body.BodyShape = body.BodyShape.TEXT
    target: Any = None


@dataclass(frozen=True)
class Entity:
    """Headers plus decoded body."""

    shape: body.BodyShape = body.BodyShape.TEXT
    target: Any = None


@dataclass(frozen=True)
class BodyStream:
    """The raw body as a binary stream."""


@dataclass(frozen=True)
class Charset:
    """The declared body charset (default from settings), validated."""


@dataclass(frozen=True)
class Header:
    name: str
    required: bool = True
    default: Optional[str] = None
    multi: bool = False


@dataclass(frozen=True)
class HeaderMapping:
    """Every header entry as a HeaderMap."""


@dataclass(frozen=True)
class Cookie:
    name: str
    required: bool = True
    default: Optional[str] = None


@dataclass(frozen=True)
class Method:
    """The HTTP method."""


@dataclass(frozen=True)
class Locale:
    """First language range of Accept-Language."""

    default: str = "en-US"


@dataclass(frozen=True)
class RawRequest:
    """The Request itself."""


@dataclass(frozen=True)
class Writer:
    """The ResponseWriter of a direct-write handler."""


@dataclass(frozen=True)
class ModelArg:
    """The Model a view handler fills with variables."""


Binding = Union[
    Param, ParamMap, ModelAttribute, Body, Entity, BodyStream, Charset, Header,
    HeaderMapping, Cookie, Method, Locale, RawRequest, Writer, ModelArg,
]


@dataclass(frozen=True)
class HandlerSpec:
    bindings: Mapping[str, Binding] = field(default_factory=dict)
    intent: RenderIntent = field(default_factory=PathAsView)


# ══════════════════════════════════════════════════════════════════════════
# Binding
# ══════════════════════════════════════════════════════════════════════════


def _locale(request: Request, default: str) -> str:
    accept = request.headers.get("accept-language")
    if not accept:
        return default
    first = accept.split(",")[0].split(";")[0].strip()
    return first if first and first != "*" else default


def resolve_binding(
    binding: Binding,
    name: str,
    request: Request,
    writer: ResponseWriter,
    model: Model,
) -> Any:
    """Produce the value of one handler argument."""
    if isinstance(binding, Param):
        raw = params.extract(request, binding.name, binding.required, binding.default)
        return params.coerce(raw, binding.type, binding.name)
    if isinstance(binding, ParamMap):
        param_map = params.parameter_map(request)
        return param_map if binding.multi else {key: param_map[key] for key in param_map}
    if isinstance(binding, ModelAttribute):
        return params.bind_model(request, binding.model)
    if isinstance(binding, Body):
        return body.decode(request, binding.shape, binding.target)
    if isinstance(binding, Entity):
        return body.read_entity(request, binding.shape, binding.target)
    if isinstance(binding, BodyStream):
        return io.BytesIO(request.body)
    if isinstance(binding, Charset):
        return body.request_charset(request)
    if isinstance(binding, Header):
        return headers.header(
            request, binding.name, binding.required, binding.default, binding.multi
        )
    if isinstance(binding, HeaderMapping):
        return headers.header_map(request)
    if isinstance(binding, Cookie):
        return headers.cookie(request, binding.name, binding.required, binding.default)
    if isinstance(binding, Method):
        return request.method
    if isinstance(binding, Locale):
        return _locale(request, binding.default)
    if isinstance(binding, RawRequest):
        return request
    if isinstance(binding, Writer):
        return writer
    if isinstance(binding, ModelArg):
        return model
    raise TypeError(f"Unknown binding for argument '{name}': {binding!r}")


def bind(
    spec: HandlerSpec,
    request: Request,
    writer: ResponseWriter,
    model: Model,
) -> Dict[str, Any]:
    """Resolve every argument of ``spec``; the first failure propagates."""
    return {
        name: resolve_binding(binding, name, request, writer, model)
        for name, binding in spec.bindings.items()
    }


def dispatch(
    spec: HandlerSpec,
    func: Callable[..., Any],
    request: Request,
    renderer: Optional[ResponseRenderer] = None,
) -> Response:
    """
    Bind, invoke and render one handler call.

    Raises:
        BindingError: an argument couldn't be bound (handler not called).
        ViewNotFoundError / TypeError: the result couldn't be rendered.
    """
    writer = ResponseWriter()
    model = Model()
    kwargs = bind(spec, request, writer, model)
    result = func(**kwargs)
    return (renderer or default_renderer).render(
        spec.intent, result, request, writer=writer, model=model
    )
