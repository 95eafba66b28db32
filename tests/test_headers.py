"""
mvcbasic — Header/Cookie Accessor Unit Tests
==============================================

What we test:
    ✅ "host" finds a header sent as "Host"
    ✅ Repeated headers are returned in order
    ✅ Required/optional/default policy for headers and cookies
"""

import pytest

from mvcbasic.core.headers import cookie, header, header_map
from mvcbasic.exceptions import BindingError, MissingCookieError, MissingHeaderError


class TestHeader:
    def test_case_insensitive(self, make_request):
        request = make_request(headers=[("Host", "localhost:8080")])
        assert header(request, "host") == "localhost:8080"
        assert header(request, "HOST") == "localhost:8080"

    def test_multi_values(self, make_request):
        request = make_request(headers=[("Accept", "text/html"), ("accept", "application/json")])
        assert header(request, "Accept") == "text/html"
        assert header(request, "accept", multi=True) == ["text/html", "application/json"]

    def test_missing_required(self, make_request):
        with pytest.raises(MissingHeaderError) as exc_info:
            header(make_request(), "host")
        assert isinstance(exc_info.value, BindingError)
        assert exc_info.value.context == {"header": "host"}

    def test_missing_optional(self, make_request):
        request = make_request()
        assert header(request, "x-trace", required=False) is None
        assert header(request, "x-trace", required=False, multi=True) == []

    def test_default(self, make_request):
        request = make_request()
        assert header(request, "x-mode", default="normal") == "normal"
        assert header(request, "x-mode", default="normal", multi=True) == ["normal"]

    def test_header_map_keeps_every_entry(self, make_request):
        request = make_request(headers=[("Host", "a"), ("X-Test", "1"), ("X-Test", "2")])
        assert header_map(request).entries() == [("Host", "a"), ("X-Test", "1"), ("X-Test", "2")]


class TestCookie:
    def test_present(self, make_request):
        request = make_request(headers=[("Cookie", "myCookie=hello")])
        assert cookie(request, "myCookie") == "hello"

    def test_missing_optional(self, make_request):
        assert cookie(make_request(), "myCookie", required=False) is None

    def test_missing_required(self, make_request):
        with pytest.raises(MissingCookieError) as exc_info:
            cookie(make_request(), "myCookie")
        assert exc_info.value.context == {"cookie": "myCookie"}

    def test_default(self, make_request):
        assert cookie(make_request(), "myCookie", default="none") == "none"

    def test_malformed_neighbour_pair(self, make_request):
        request = make_request(headers=[("Cookie", 'a=b"c; myCookie=hello')])
        assert cookie(request, "myCookie") == "hello"
