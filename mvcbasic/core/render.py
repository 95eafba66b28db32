"""
mvcbasic — Response Renderer
==============================

What:  Converts a handler's result into a Response, then into bytes.
Why:   Handlers say *what* they return (raw bytes, a value, a view); the
       renderer decides *how* it goes on the wire.
How:   Each handler declares one render intent:

    DirectWrite        handler wrote to a ResponseWriter; bytes pass untouched
    EntityWithStatus   handler returned ResponseEntity(body, status, headers)
    BodyReturn         return value is the body; status fixed by the intent
    ViewReturn         return value names a view (ModelAndView or str + Model)
    PathAsView         nothing declared; the request path is the view name

    render()  intent + result → Response (view names already resolved)
    write()   Response → RenderedOutput (status, headers, body bytes)

Serialization:
    str    → literal text, text/plain;charset=UTF-8
    bytes  → as-is, application/octet-stream
    other  → JSON via pydantic-core, application/json
"""

import io
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar, Union

from pydantic_core import PydanticSerializationError, to_json

from mvcbasic.core.request import Request
from mvcbasic.core.views import Jinja2TemplateRenderer, TemplateRenderer, ViewResolver
from mvcbasic.exceptions import SerializationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TEXT_PLAIN = "text/plain;charset=UTF-8"
TEXT_HTML = "text/html;charset=UTF-8"
APPLICATION_JSON = "application/json"
OCTET_STREAM = "application/octet-stream"

_UNSET: Any = object()


# ══════════════════════════════════════════════════════════════════════════
# Handler-facing types
# ══════════════════════════════════════════════════════════════════════════


class ResponseWriter:
    """Output handed to direct-write handlers."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self.status: Optional[int] = None
        self.headers: List[Tuple[str, str]] = []
        self._buffer = io.BytesIO()

    def write(self, data: Union[str, bytes]) -> None:
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self._buffer.write(data)

    def set_status(self, status: int) -> None:
        self.status = status

    def add_header(self, name: str, value: str) -> None:
        self.headers.append((name, value))

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()


@dataclass
class ResponseEntity(Generic[T]):
    """Body plus explicit status and headers."""

    body: T
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


class Model(dict):
    """Variables exposed to a view."""

    def add_attribute(self, name: str, value: Any) -> "Model":
        self[name] = value
        return self


@dataclass
class ModelAndView:
    view_name: str
    model: Dict[str, Any] = field(default_factory=dict)

    def add_object(self, name: str, value: Any) -> "ModelAndView":
        self.model[name] = value
        return self


# ══════════════════════════════════════════════════════════════════════════
# Render intents
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class DirectWrite:
    status: int = 200


@dataclass(frozen=True)
class EntityWithStatus:
    pass


@dataclass(frozen=True)
class BodyReturn:
    status: int = 200


@dataclass(frozen=True)
class ViewReturn:
    pass


@dataclass(frozen=True)
class PathAsView:
    pass


RenderIntent = Union[DirectWrite, EntityWithStatus, BodyReturn, ViewReturn, PathAsView]


# ══════════════════════════════════════════════════════════════════════════
# Responses
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ViewReference:
    view_name: str
    template_name: str
    location: str
    variables: Mapping[str, Any]


@dataclass(frozen=True)
class Response:
    """
    Status, headers and exactly one of: raw bytes, a structured value to
    serialize, or a view reference.
    """

    status: int = 200
    headers: Tuple[Tuple[str, str], ...] = ()
    raw: Optional[bytes] = None
    value: Any = _UNSET
    view: Optional[ViewReference] = None

    def __post_init__(self) -> None:
        present = [self.raw is not None, self.value is not _UNSET, self.view is not None]
        if sum(present) != 1:
            raise ValueError("Response needs exactly one of raw, value or view")

    @property
    def kind(self) -> str:
        if self.raw is not None:
            return "raw"
        if self.view is not None:
            return "view"
        return "value"


@dataclass(frozen=True)
class RenderedOutput:
    """What goes on the wire."""

    status: int
    headers: List[Tuple[str, str]]
    body: bytes

    @property
    def content_type(self) -> Optional[str]:
        for name, value in self.headers:
            if name.lower() == "content-type":
                return value
        return None


def serialize(value: Any) -> Tuple[bytes, Optional[str]]:
    """
    Body bytes and content type for a handler value.

    Raises:
        SerializationError: the value (or one of its fields) has a type
            JSON can't represent.
    """
    if value is None:
        return b"", None
    if isinstance(value, str):
        return value.encode("utf-8"), TEXT_PLAIN
    if isinstance(value, (bytes, bytearray)):
        return bytes(value), OCTET_STREAM
    try:
        return to_json(value), APPLICATION_JSON
    except PydanticSerializationError as exc:
        raise SerializationError(
            message=f"Cannot serialize {type(value).__name__} as JSON",
            context={"reason": str(exc)},
        ) from exc


# ══════════════════════════════════════════════════════════════════════════
# Renderer
# ══════════════════════════════════════════════════════════════════════════


class ResponseRenderer:
    """Turns handler results into responses according to their intent."""

    def __init__(
        self,
        resolver: Optional[ViewResolver] = None,
        templates: Optional[TemplateRenderer] = None,
    ):
        self.resolver = resolver or ViewResolver()
        self.templates = templates or Jinja2TemplateRenderer(str(self.resolver.template_dir))

    def render(
        self,
        intent: RenderIntent,
        result: Any,
        request: Request,
        writer: Optional[ResponseWriter] = None,
        model: Optional[Mapping[str, Any]] = None,
    ) -> Response:
        """
        Build the Response for ``result``.

        Raises:
            ViewNotFoundError: a view intent names a view with no template.
            TypeError: the result doesn't match the declared intent.
        """
        model = model if model is not None else {}

        if isinstance(intent, DirectWrite):
            writer = writer or ResponseWriter()
            if result is not None:
                logger.debug("Ignoring return value of direct-write handler for %s", request.path)
            return Response(
                status=writer.status or intent.status,
                headers=tuple(writer.headers),
                raw=writer.getvalue(),
            )

        if isinstance(intent, EntityWithStatus):
            if not isinstance(result, ResponseEntity):
                raise TypeError(
                    f"Entity handler for {request.path} returned {type(result).__name__}, "
                    "expected ResponseEntity"
                )
            return Response(
                status=result.status,
                headers=tuple(result.headers.items()),
                value=result.body,
            )

        if isinstance(intent, BodyReturn):
            return Response(status=intent.status, value=result)

        if isinstance(intent, ViewReturn):
            if isinstance(result, ModelAndView):
                return self._view(result.view_name, {**model, **result.model})
            if isinstance(result, str):
                return self._view(result, dict(model))
            raise TypeError(
                f"View handler for {request.path} returned {type(result).__name__}, "
                "expected ModelAndView or a view name"
            )

        if isinstance(intent, PathAsView):
            view_name = request.path.strip("/")
            logger.warning(
                "Handler for %s declared no response; using the path as view name '%s'",
                request.path,
                view_name,
            )
            return self._view(view_name, dict(model))

        raise TypeError(f"Unknown render intent: {intent!r}")

    def _view(self, view_name: str, variables: Dict[str, Any]) -> Response:
        resolved = self.resolver.resolve(view_name)
        return Response(
            view=ViewReference(
                view_name=resolved.view_name,
                template_name=resolved.template_name,
                location=resolved.location,
                variables=variables,
            )
        )

    def write(self, response: Response) -> RenderedOutput:
        """
        Produce the wire form of ``response``.

        Raises:
            SerializationError: structured value can't be serialized.
            ViewNotFoundError: template disappeared between resolve and render.
        """
        headers = list(response.headers)
        has_type = any(name.lower() == "content-type" for name, _ in headers)

        if response.kind == "raw":
            body = response.raw or b""
            content_type = TEXT_PLAIN if body else None
        elif response.kind == "view":
            view = response.view
            body = self.templates.render(view.template_name, view.variables)
            content_type = TEXT_HTML
        else:
            body, content_type = serialize(response.value)

        if content_type and not has_type:
            headers.append(("Content-Type", content_type))
        return RenderedOutput(status=response.status, headers=headers, body=body)


# Singleton instance; templates live in settings.template_dir
renderer = ResponseRenderer()
