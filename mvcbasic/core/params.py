"""
mvcbasic — Parameter Extractor
================================

What:  Pulls named string values out of the query string and url-encoded form.
Why:   Handlers ask for "username" without caring whether it came from
       ``?username=`` or a posted HTML form.
How:   Query entries first, then form entries, merged into one MultiValueDict.
       Values stay text; ``coerce`` converts them when the caller asks.

Default/required policy:
    default given       → returned when the key is absent or its value is ""
    required, no default → MissingParameterError when absent
    optional, no default → None when absent
"""

import logging
from typing import Any, List, Optional, Type, TypeVar

from pydantic import ValidationError

from mvcbasic.core.convert import adapter_for, coercion_error, convert
from mvcbasic.core.request import MultiValueDict, Request
from mvcbasic.exceptions import MissingParameterError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parameter_map(request: Request) -> MultiValueDict:
    """Every parameter of the request: query values first, then form values."""
    return request.query.merged(request.form)


def extract(
    request: Request,
    key: str,
    required: bool = True,
    default: Any = None,
) -> Any:
    """
    Return the first value of ``key``.

    Raises:
        MissingParameterError: ``required`` is set, the key is absent and no
            default is configured.
    """
    value = parameter_map(request).get(key)
    if default is not None and (value is None or value == ""):
        return default
    if value is None:
        if required:
            raise MissingParameterError(key)
        return None
    return value


def extract_all(request: Request, key: str) -> List[str]:
    """Every value of ``key`` in order of appearance (empty list if absent)."""
    return parameter_map(request).get_all(key)


def coerce(value: Any, target: Type[T], name: str) -> Optional[T]:
    """
    Convert an extracted value to ``target``.

    ``None`` passes through so optional parameters stay optional; values that
    already have the target type (typically defaults) are returned as-is.
    """
    if value is None:
        return None
    if isinstance(target, type) and isinstance(value, target):
        if not (target is int and isinstance(value, bool)):
            return value
    return convert(value, target, name)


def bind_model(request: Request, model: Type[T]) -> T:
    """
    Build ``model`` from same-named parameters.

    Fields with no matching parameter keep the model's defaults. A value
    that doesn't fit its field type raises TypeCoercionError.
    """
    params = parameter_map(request)
    fields = getattr(model, "model_fields", None)
    names = list(fields) if fields is not None else list(params)
    data = {name: params.get(name) for name in names if name in params}
    try:
        bound = adapter_for(model).validate_python(data)
    except ValidationError as exc:
        raise coercion_error(exc, model.__name__, data, model) from exc
    logger.debug("Bound %s from parameters %s", model.__name__, sorted(data))
    return bound
