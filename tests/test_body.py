"""
mvcbasic — Body Decoder Unit Tests
====================================

What:  Tests for text and JSON body decoding.

What we test:
    ✅ {"username":"hello","age":20} binds to HelloData
    ✅ Unknown JSON fields are ignored
    ✅ A wrongly typed field raises TypeCoercionError
    ✅ Broken JSON raises MalformedBodyError
    ✅ Charset handling (declared, default, unknown)
    ✅ Undecodable text bytes become U+FFFD; in JSON they are malformed
    ✅ decode → serialize → decode reproduces the record
"""

import pytest

from mvcbasic.core.body import BodyShape, HttpEntity, decode, read_entity, read_text
from mvcbasic.core.render import serialize
from mvcbasic.exceptions import (
    MalformedBodyError,
    TypeCoercionError,
    UnsupportedEncodingError,
)
from mvcbasic.schemas.hello import HelloData


class TestJsonBody:
    """Tests for structured decoding."""

    def test_binds_record(self, json_request):
        request = json_request('{"username":"hello","age":20}')
        data = decode(request, BodyShape.JSON, HelloData)
        assert data == HelloData(username="hello", age=20)

    def test_unknown_fields_ignored(self, json_request):
        request = json_request('{"username":"hello","age":20,"nickname":"h"}')
        data = decode(request, BodyShape.JSON, HelloData)
        assert data == HelloData(username="hello", age=20)

    def test_missing_fields_use_defaults(self, json_request):
        data = decode(json_request("{}"), BodyShape.JSON, HelloData)
        assert data.username is None
        assert data.age == 0

    def test_wrong_field_type(self, json_request):
        request = json_request('{"username":"hello","age":"notanumber"}')
        with pytest.raises(TypeCoercionError) as exc_info:
            decode(request, BodyShape.JSON, HelloData)
        assert exc_info.value.name == "age"
        assert exc_info.value.value == "notanumber"

    def test_invalid_json(self, json_request):
        with pytest.raises(MalformedBodyError):
            decode(json_request('{"username":'), BodyShape.JSON, HelloData)

    def test_wrong_top_level_type(self, json_request):
        with pytest.raises(MalformedBodyError):
            decode(json_request("[1, 2]"), BodyShape.JSON, HelloData)

    def test_json_needs_target(self, json_request):
        with pytest.raises(ValueError):
            decode(json_request("{}"), BodyShape.JSON)

    @pytest.mark.parametrize(
        "payload",
        [
            '{"username":"hello","age":20}',
            '{"username":"hello","age":20,"nickname":"h"}',
            '{"age":"31"}',
            '{"username":"café"}',
            "{}",
        ],
    )
    def test_decode_serialize_decode(self, json_request, payload):
        first = decode(json_request(payload), BodyShape.JSON, HelloData)
        body, content_type = serialize(first)
        assert content_type == "application/json"
        assert decode(json_request(body), BodyShape.JSON, HelloData) == first


class TestTextBody:
    """Tests for text decoding and charsets."""

    def test_utf8_default(self, make_request):
        request = make_request(method="POST", body="héllo".encode("utf-8"))
        assert decode(request, BodyShape.TEXT) == "héllo"

    def test_declared_charset(self, make_request):
        request = make_request(
            method="POST",
            headers=[("Content-Type", "text/plain; charset=ISO-8859-1")],
            body="café".encode("latin-1"),
        )
        assert read_text(request) == "café"

    def test_unknown_charset(self, make_request):
        request = make_request(
            method="POST",
            headers=[("Content-Type", "text/plain; charset=x-unknown")],
            body=b"hello",
        )
        with pytest.raises(UnsupportedEncodingError):
            read_text(request)

    def test_undecodable_bytes_are_replaced(self, make_request):
        request = make_request(method="POST", body=b"caf\xe9")
        assert decode(request, BodyShape.TEXT) == "caf\ufffd"
        assert read_text(request) == "caf\ufffd"

    def test_undecodable_bytes_in_json(self, make_request):
        request = make_request(
            method="POST",
            headers=[("Content-Type", "application/json")],
            body=b'{"username":"caf\xe9"}',
        )
        with pytest.raises(MalformedBodyError) as exc_info:
            decode(request, BodyShape.JSON, HelloData)
        assert not isinstance(exc_info.value, UnsupportedEncodingError)
        assert exc_info.value.context["charset"] == "utf-8"

    def test_decoding_twice_gives_equal_values(self, make_request):
        request = make_request(method="POST", body=b"hello")
        assert decode(request, BodyShape.TEXT) == decode(request, BodyShape.TEXT)

    def test_empty_body(self, make_request):
        assert decode(make_request(method="POST"), BodyShape.TEXT) == ""


def test_read_entity_pairs_headers_and_body(json_request):
    entity = read_entity(json_request('{"username":"hello"}'), BodyShape.JSON, HelloData)
    assert isinstance(entity, HttpEntity)
    assert entity.headers.get("content-type") == "application/json"
    assert entity.body.username == "hello"
