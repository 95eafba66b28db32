"""
mvcbasic — Header/Cookie Accessor
===================================

What:  Looks up request headers and cookies with required/default policy.
How:   Header names are matched case-insensitively (``Host`` == ``host``).
       Repeated header lines are kept in order; callers pick the first value
       or all of them.
"""

from typing import List, Optional, Union

from mvcbasic.core.request import HeaderMap, Request
from mvcbasic.exceptions import MissingCookieError, MissingHeaderError


def header_map(request: Request) -> HeaderMap:
    """All header entries of the request, in wire order."""
    return request.headers


def header(
    request: Request,
    name: str,
    required: bool = True,
    default: Optional[str] = None,
    multi: bool = False,
) -> Union[str, List[str], None]:
    """
    Value(s) of header ``name``.

    With ``multi`` every value is returned as a list, otherwise the first.

    Raises:
        MissingHeaderError: header absent, ``required`` set, no default.
    """
    values = request.headers.get_all(name)
    if not values:
        if default is not None:
            return [default] if multi else default
        if required:
            raise MissingHeaderError(name)
        return [] if multi else None
    return values if multi else values[0]


def cookie(
    request: Request,
    name: str,
    required: bool = True,
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Value of cookie ``name``.

    Raises:
        MissingCookieError: cookie absent, ``required`` set, no default.
    """
    value = request.cookies.get(name)
    if value is None:
        if default is not None:
            return default
        if required:
            raise MissingCookieError(name)
    return value
