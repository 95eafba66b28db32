"""
mvcbasic — Response Renderer Unit Tests
=========================================

What:  Tests for every render intent, view resolution and serialization.

What we test:
    ✅ Direct writes pass through untouched
    ✅ ResponseEntity status and headers are honored
    ✅ Strings are text/plain, records are JSON
    ✅ "response/hello" resolves to templates/response/hello.html
    ✅ Path-as-view uses the request path and logs a warning
    ✅ Missing views and unserializable values raise
"""

import json
import logging
import os

import pytest

from mvcbasic.core.render import (
    APPLICATION_JSON,
    OCTET_STREAM,
    TEXT_HTML,
    TEXT_PLAIN,
    BodyReturn,
    DirectWrite,
    EntityWithStatus,
    ModelAndView,
    PathAsView,
    Response,
    ResponseEntity,
    ResponseRenderer,
    ResponseWriter,
    ViewReturn,
    serialize,
)
from mvcbasic.core.request import Request
from mvcbasic.core.views import ViewResolver
from mvcbasic.exceptions import SerializationError, ViewNotFoundError
from mvcbasic.schemas.hello import HelloData


@pytest.fixture
def renderer(template_dir):
    return ResponseRenderer(resolver=ViewResolver(str(template_dir)))


@pytest.fixture
def request_():
    return Request.build(path="/response-test")


class TestDirectWrite:
    def test_bytes_pass_through(self, renderer, request_):
        writer = ResponseWriter()
        writer.write("ok")
        response = renderer.render(DirectWrite(), None, request_, writer=writer)
        assert response.kind == "raw"
        assert response.raw == b"ok"

        output = renderer.write(response)
        assert output.status == 200
        assert output.body == b"ok"
        assert output.content_type == TEXT_PLAIN

    def test_writer_status_and_headers(self, renderer, request_):
        writer = ResponseWriter()
        writer.set_status(202)
        writer.add_header("Content-Type", "text/csv")
        writer.write(b"a,b")
        output = renderer.write(renderer.render(DirectWrite(), None, request_, writer=writer))
        assert output.status == 202
        assert output.headers == [("Content-Type", "text/csv")]

    def test_empty_write_has_no_content_type(self, renderer, request_):
        output = renderer.write(renderer.render(DirectWrite(), None, request_))
        assert output.body == b""
        assert output.content_type is None


class TestEntityWithStatus:
    def test_status_and_headers(self, renderer, request_):
        entity = ResponseEntity("ok", status=201, headers={"X-Test": "1"})
        output = renderer.write(renderer.render(EntityWithStatus(), entity, request_))
        assert output.status == 201
        assert output.body == b"ok"
        assert ("X-Test", "1") in output.headers
        assert output.content_type == TEXT_PLAIN

    def test_record_body_is_json(self, renderer, request_):
        entity = ResponseEntity(HelloData(username="userA", age=20))
        output = renderer.write(renderer.render(EntityWithStatus(), entity, request_))
        assert output.content_type == APPLICATION_JSON
        assert json.loads(output.body) == {"username": "userA", "age": 20}

    def test_wrong_result_type(self, renderer, request_):
        with pytest.raises(TypeError):
            renderer.render(EntityWithStatus(), "ok", request_)


class TestBodyReturn:
    def test_string(self, renderer, request_):
        output = renderer.write(renderer.render(BodyReturn(), "ok", request_))
        assert output.status == 200
        assert output.body == b"ok"
        assert output.content_type == TEXT_PLAIN

    def test_record(self, renderer, request_):
        data = HelloData(username="userA", age=20)
        output = renderer.write(renderer.render(BodyReturn(status=200), data, request_))
        assert output.content_type == APPLICATION_JSON
        assert json.loads(output.body) == {"username": "userA", "age": 20}

    def test_status_from_intent(self, renderer, request_):
        output = renderer.write(renderer.render(BodyReturn(status=201), "created", request_))
        assert output.status == 201

    def test_bytes(self, renderer, request_):
        output = renderer.write(renderer.render(BodyReturn(), b"\x00\x01", request_))
        assert output.body == b"\x00\x01"
        assert output.content_type == OCTET_STREAM

    def test_none_is_empty(self, renderer, request_):
        output = renderer.write(renderer.render(BodyReturn(), None, request_))
        assert output.body == b""
        assert output.content_type is None

    def test_unserializable(self, renderer, request_):
        response = renderer.render(BodyReturn(), {"value": object()}, request_)
        with pytest.raises(SerializationError):
            renderer.write(response)


class TestViews:
    def test_model_and_view_packaged_template(self, request_):
        renderer = ResponseRenderer()
        mav = ModelAndView("response/hello").add_object("data", "hello!")
        response = renderer.render(ViewReturn(), mav, request_)

        assert response.kind == "view"
        assert response.view.view_name == "response/hello"
        assert response.view.location.endswith(
            os.path.join("templates", "response", "hello.html")
        )
        assert dict(response.view.variables) == {"data": "hello!"}

        output = renderer.write(response)
        assert output.content_type == TEXT_HTML
        assert b"hello!" in output.body

    def test_view_name_with_model(self, renderer, request_):
        response = renderer.render(
            ViewReturn(), "response/hello", request_, model={"data": "hello!!"}
        )
        assert renderer.write(response).body == b"<p>hello!!</p>"

    def test_variables_are_escaped(self, renderer, request_):
        mav = ModelAndView("response/hello", {"data": "<b>x</b>"})
        output = renderer.write(renderer.render(ViewReturn(), mav, request_))
        assert output.body == b"<p>&lt;b&gt;x&lt;/b&gt;</p>"

    def test_missing_view(self, renderer, request_):
        with pytest.raises(ViewNotFoundError) as exc_info:
            renderer.render(ViewReturn(), "response/missing", request_)
        assert exc_info.value.view_name == "response/missing"

    def test_view_outside_template_dir(self, renderer, request_):
        with pytest.raises(ViewNotFoundError):
            renderer.render(ViewReturn(), "../secret", request_)

    def test_wrong_result_type(self, renderer, request_):
        with pytest.raises(TypeError):
            renderer.render(ViewReturn(), 42, request_)

    def test_path_as_view(self, renderer, caplog):
        request = Request.build(path="/response/hello")
        with caplog.at_level(logging.WARNING, logger="mvcbasic.core.render"):
            response = renderer.render(PathAsView(), None, request, model={"data": "hi"})
        assert response.view.view_name == "response/hello"
        assert any("path as view name" in record.getMessage() for record in caplog.records)
        assert renderer.write(response).body == b"<p>hi</p>"

    def test_path_as_view_without_template(self, renderer):
        with pytest.raises(ViewNotFoundError):
            renderer.render(PathAsView(), None, Request.build(path="/no/such/view"))


class TestResponse:
    def test_exactly_one_payload(self):
        with pytest.raises(ValueError):
            Response()
        with pytest.raises(ValueError):
            Response(raw=b"ok", value="ok")

    def test_none_value_is_a_payload(self):
        assert Response(value=None).kind == "value"


def test_serialize_unknown_type():
    with pytest.raises(SerializationError):
        serialize(object())
