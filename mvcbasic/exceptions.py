"""
mvcbasic — Custom Exception Hierarchy
=======================================

What:  Exceptions raised while binding a request or rendering a response.
Why:   The binder and renderer stay free of HTTP details; the exception type
       alone decides the status class the client sees.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses.
Who:   Raised by mvcbasic.core; caught by global handlers.
When:  Binder-stage errors happen before the handler runs; renderer-stage
       errors happen after it returns. Both are terminal for the request.

Exception Hierarchy:
    MvcBasicError (base)
    ├── BindingError                   → 400 Bad Request
    │   ├── MissingParameterError
    │   ├── MissingHeaderError
    │   ├── MissingCookieError
    │   ├── TypeCoercionError
    │   └── MalformedBodyError
    │       └── UnsupportedEncodingError
    ├── ViewNotFoundError              → 404 Not Found
    └── SerializationError             → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class MvcBasicError(Exception):
    """
    Base exception for all mvcbasic errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for binding errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BindingError(MvcBasicError):
    """
    Raised when request data cannot be turned into handler arguments.

    HTTP:    400 Bad Request (the client can fix the request)
    """

    def __init__(
        self,
        message: str = "Request binding failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MissingParameterError(BindingError):
    """A required query/form parameter is absent and has no default."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["parameter"] = name
        super().__init__(
            message=f"Required request parameter '{name}' is not present",
            context=ctx,
        )
        self.name = name


class MissingHeaderError(BindingError):
    """A required request header is absent and has no default."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["header"] = name
        super().__init__(
            message=f"Required request header '{name}' is not present",
            context=ctx,
        )
        self.name = name


class MissingCookieError(BindingError):
    """A required cookie is absent and has no default."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["cookie"] = name
        super().__init__(
            message=f"Required cookie '{name}' is not present",
            context=ctx,
        )
        self.name = name


class TypeCoercionError(BindingError):
    """
    Raised when a text value cannot be converted to the target type.

    When:    "abc" bound to an int parameter; "age": "notanumber" in a JSON body.
    """

    def __init__(
        self,
        name: str,
        value: Any,
        target: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx.update({"field": name, "value": value, "target": target})
        super().__init__(
            message=f"Failed to convert value '{value}' of '{name}' to {target}",
            context=ctx,
        )
        self.name = name
        self.value = value
        self.target = target


class MalformedBodyError(BindingError):
    """
    Raised when the request body can't be read for the requested shape.

    When:    Invalid JSON, JSON whose top level doesn't fit the target record,
             bytes that don't decode in the declared charset.
    """

    def __init__(
        self,
        message: str = "Malformed request body",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class UnsupportedEncodingError(MalformedBodyError):
    """The request declares a charset Python has no codec for."""

    def __init__(self, charset: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["charset"] = charset
        super().__init__(message=f"Unsupported charset '{charset}'", context=ctx)
        self.charset = charset


class ViewNotFoundError(MvcBasicError):
    """
    Raised when a logical view name doesn't resolve to a template.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        view_name: str,
        location: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["view"] = view_name
        if location:
            ctx["location"] = location
        super().__init__(message=f"View '{view_name}' was not found", context=ctx)
        self.view_name = view_name
        self.location = location


class SerializationError(MvcBasicError):
    """
    Raised when a handler's return value can't be written as a response body.

    HTTP:    500 Internal Server Error (the handler returned something unsupported)
    """

    def __init__(
        self,
        message: str = "Response body could not be serialized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
