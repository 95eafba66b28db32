"""
Type conversion shared by the parameter extractor and the body decoder.

Conversion is pydantic's lax mode: "20" → 20, "true" → True, "abc" → error.
Adapters are cached per target type; building one compiles a validator.
"""

from functools import lru_cache
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from mvcbasic.exceptions import TypeCoercionError


@lru_cache(maxsize=None)
def adapter_for(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def type_name(target: Any) -> str:
    return getattr(target, "__name__", None) or repr(target)


def field_path(loc: tuple) -> str:
    """("orders", 0, "id") → "orders[0].id"."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def coercion_error(
    exc: ValidationError, name: str, value: Any, target: Any
) -> TypeCoercionError:
    """Translate the first pydantic error into a TypeCoercionError."""
    first: Optional[dict] = exc.errors()[0] if exc.errors() else None
    if first and first.get("loc"):
        name = field_path(first["loc"])
        value = first.get("input", value)
    return TypeCoercionError(
        name=name,
        value=value,
        target=type_name(target),
        context={"reason": first["msg"]} if first else None,
    )


def convert(value: Any, target: Any, name: str) -> Any:
    """Convert ``value`` to ``target`` or raise TypeCoercionError."""
    try:
        return adapter_for(target).validate_python(value)
    except ValidationError as exc:
        raise coercion_error(exc, name, value, target) from exc
