"""
mvcbasic — Body Decoder
=========================

What:  Turns the raw request body into either text or a structured value.
Why:   Handlers declare the shape they want; the decoder does the charset and
       JSON work and reports failures with binding exceptions.
How:   Bytes are decoded with the request charset (default utf-8). Structured
       targets are validated with a pydantic TypeAdapter, which maps JSON
       object fields by name and ignores fields the target doesn't declare.

Failure mapping:
    unknown charset                       → UnsupportedEncodingError
    bytes not valid in the charset        → U+FFFD for text, MalformedBodyError for JSON
    not JSON / wrong top-level JSON type  → MalformedBodyError
    field value of the wrong type         → TypeCoercionError
"""

import codecs
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from mvcbasic.core.convert import adapter_for, coercion_error, type_name
from mvcbasic.core.request import HeaderMap, Request
from mvcbasic.exceptions import MalformedBodyError, UnsupportedEncodingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BodyShape(str, Enum):
    """How the body should be read."""

    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True)
class HttpEntity(Generic[T]):
    """Request headers together with the decoded body."""

    headers: HeaderMap
    body: T


def request_charset(request: Request) -> str:
    """The request charset, checked against the available codecs."""
    charset = request.charset
    try:
        codecs.lookup(charset)
    except LookupError:
        raise UnsupportedEncodingError(charset)
    return charset


def read_text(request: Request, strict: bool = False) -> str:
    """
    Decode the whole body with the request charset.

    Bytes that aren't valid in the charset become U+FFFD, so plain text
    reading only fails on an unknown charset. ``strict`` turns them into
    MalformedBodyError instead (used for JSON).
    """
    charset = request_charset(request)
    if not strict:
        return request.body.decode(charset, errors="replace")
    try:
        return request.body.decode(charset)
    except UnicodeDecodeError as exc:
        raise MalformedBodyError(
            message=f"Request body is not valid {charset}",
            context={"charset": charset, "position": exc.start},
        ) from exc


def read_json(request: Request, target: Any) -> Any:
    """Parse the body as JSON into ``target``."""
    return parse_json(read_text(request, strict=True), target)


def parse_json(text: str, target: Any) -> Any:
    """Parse already-decoded JSON text into ``target``."""
    try:
        return adapter_for(target).validate_json(text)
    except ValidationError as exc:
        errors = exc.errors()
        # errors without a field location concern the document as a whole
        if not errors or any(not err.get("loc") for err in errors):
            reason = errors[0]["msg"] if errors else str(exc)
            raise MalformedBodyError(
                message=f"Request body is not valid JSON for {type_name(target)}",
                context={"reason": reason},
            ) from exc
        raise coercion_error(exc, type_name(target), text, target) from exc


def decode(request: Request, shape: BodyShape, target: Optional[Any] = None) -> Any:
    """
    Decode the request body as ``shape``.

    ``target`` is required for JSON and ignored for text. Calling this twice
    on the same request yields equal values.
    """
    if shape is BodyShape.TEXT:
        value = read_text(request)
    elif shape is BodyShape.JSON:
        if target is None:
            raise ValueError("JSON decoding needs a target type")
        value = read_json(request, target)
    else:
        raise ValueError(f"Unknown body shape: {shape!r}")
    logger.debug("Decoded %d body bytes as %s", len(request.body), shape.value)
    return value


def read_entity(
    request: Request, shape: BodyShape, target: Optional[Any] = None
) -> HttpEntity:
    """Decode the body and pair it with the request headers."""
    return HttpEntity(headers=request.headers, body=decode(request, shape, target))
