"""
mvcbasic — Request Model
==========================

What:  Immutable view of an incoming call plus the ordered multimap it uses.
Why:   Query strings, form bodies and header blocks all allow one key to appear
       several times. A plain dict would silently keep only one of them.
How:   MultiValueDict keeps every (key, value) entry in arrival order and an
       index from key to values. HeaderMap is the case-insensitive variant.
Who:   Built by mvcbasic.web from a Starlette request (or directly in tests);
       read by the parameter extractor, body decoder and header accessor.
"""

import codecs
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple
from urllib.parse import parse_qsl

from starlette.requests import cookie_parser

from mvcbasic.config import settings
from mvcbasic.exceptions import UnsupportedEncodingError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class MultiValueDict:
    """
    Read-only mapping where one key can carry several values.

    ``d[key]`` and ``get`` return the first value; ``get_all`` returns all of
    them in the order they appeared on the wire.
    """

    def __init__(self, entries: Iterable[Tuple[str, str]] = ()):
        self._entries: List[Tuple[str, str]] = []
        self._index: Dict[str, List[str]] = {}
        for key, value in entries:
            self._append(key, value)

    @classmethod
    def from_query_string(cls, query: str) -> "MultiValueDict":
        """Parse ``a=1&a=2&b=`` keeping blank values and repeated keys."""
        return cls(parse_qsl(query or "", keep_blank_values=True))

    @staticmethod
    def _normalize(key: str) -> str:
        return key

    def _append(self, key: str, value: str) -> None:
        self._entries.append((key, value))
        self._index.setdefault(self._normalize(key), []).append(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        values = self._index.get(self._normalize(key))
        return values[0] if values else default

    def get_all(self, key: str) -> List[str]:
        return list(self._index.get(self._normalize(key), []))

    def entries(self) -> List[Tuple[str, str]]:
        """Every (key, value) pair in arrival order, duplicates included."""
        return list(self._entries)

    def to_dict(self) -> Dict[str, List[str]]:
        """Key → ordered values, keys in first-appearance order."""
        spelling: Dict[str, str] = {}
        result: Dict[str, List[str]] = {}
        for key, value in self._entries:
            first = spelling.setdefault(self._normalize(key), key)
            result.setdefault(first, []).append(value)
        return result

    def merged(self, other: "MultiValueDict") -> "MultiValueDict":
        """New multimap with this one's entries followed by ``other``'s."""
        return type(self)(self._entries + other._entries)

    def __getitem__(self, key: str) -> str:
        values = self._index.get(self._normalize(key))
        if not values:
            raise KeyError(key)
        return values[0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self._index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiValueDict):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class HeaderMap(MultiValueDict):
    """MultiValueDict with case-insensitive lookup; original names are kept."""

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower()


def parse_cookies(header_values: Iterable[str]) -> Dict[str, str]:
    """
    Cookie name → value from one or more ``Cookie`` header lines.

    Parsed the way browsers send them: a malformed pair is skipped without
    losing the pairs around it. A name repeated on a later header line
    keeps its first value.
    """
    cookies: Dict[str, str] = {}
    for raw in header_values:
        for name, value in cookie_parser(raw).items():
            cookies.setdefault(name, value)
    return cookies


def _content_type_params(content_type: Optional[str]) -> Tuple[str, Dict[str, str]]:
    if not content_type:
        return "", {}
    media_type, *raw_params = content_type.split(";")
    params = {}
    for raw in raw_params:
        name, _, value = raw.strip().partition("=")
        if name:
            params[name.lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params


@dataclass(frozen=True)
class Request:
    """
    Immutable view of an incoming HTTP call.

    Attributes:
        method:   Upper-case HTTP method.
        path:     Decoded URL path, always starting with "/".
        query:    Query-string parameters.
        form:     Url-encoded body parameters (empty for other content types).
        headers:  Header entries in wire order, duplicates allowed.
        cookies:  Cookie name → value.
        body:     Raw body bytes, read to completion.
    """

    method: str
    path: str
    query: MultiValueDict = field(default_factory=MultiValueDict)
    form: MultiValueDict = field(default_factory=MultiValueDict)
    headers: HeaderMap = field(default_factory=HeaderMap)
    cookies: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @classmethod
    def build(
        cls,
        method: str = "GET",
        path: str = "/",
        query_string: str = "",
        headers: Iterable[Tuple[str, str]] = (),
        body: bytes = b"",
        cookies: Optional[Mapping[str, str]] = None,
    ) -> "Request":
        """
        Assemble a Request from raw wire pieces.

        Form parameters are parsed from the body when Content-Type is
        url-encoded; cookies are parsed from the Cookie header unless given.
        """
        header_map = HeaderMap(headers)
        media_type, params = _content_type_params(header_map.get("content-type"))
        form = MultiValueDict()
        if media_type == FORM_CONTENT_TYPE and body:
            charset = params.get("charset") or settings.default_charset
            try:
                codecs.lookup(charset)
            except LookupError:
                raise UnsupportedEncodingError(charset)
            form = MultiValueDict(
                parse_qsl(
                    body.decode(charset, errors="replace"),
                    keep_blank_values=True,
                    encoding=charset,
                    errors="replace",
                )
            )
        if cookies is None:
            cookies = parse_cookies(header_map.get_all("cookie"))
        return cls(
            method=method.upper(),
            path=path or "/",
            query=MultiValueDict.from_query_string(query_string),
            form=form,
            headers=header_map,
            cookies=dict(cookies),
            body=body,
        )

    @property
    def content_type(self) -> str:
        """Media type without parameters, lower-cased ("" when absent)."""
        return _content_type_params(self.headers.get("content-type"))[0]

    @property
    def charset(self) -> str:
        """Declared body charset, or the configured default."""
        _, params = _content_type_params(self.headers.get("content-type"))
        return params.get("charset") or settings.default_charset
