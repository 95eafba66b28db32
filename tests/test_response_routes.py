"""
mvcbasic — Response Endpoint Tests
====================================

What we test:
    ✅ Message-body responses (text and JSON)
    ✅ Server-rendered views through the response/hello template
    ✅ Static resources
"""

import pytest

USER_A = {"username": "userA", "age": 20}


class TestResponseBodyRoutes:
    @pytest.mark.asyncio
    async def test_string_responses(self, test_client):
        for version in ("v1", "v2", "v3"):
            response = await test_client.get(f"/response-body-string-{version}")
            assert response.status_code == 200, version
            assert response.text == "ok"
            assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_json_responses(self, test_client):
        for version in ("v1", "v2"):
            response = await test_client.get(f"/response-body-json-{version}")
            assert response.status_code == 200, version
            assert response.headers["content-type"] == "application/json"
            assert response.json() == USER_A


class TestResponseViewRoutes:
    @pytest.mark.asyncio
    async def test_model_and_view(self, test_client):
        response = await test_client.get("/response-view-v1")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "hello!" in response.text

    @pytest.mark.asyncio
    async def test_view_name(self, test_client):
        response = await test_client.get("/response-view-v2")
        assert response.status_code == 200
        assert "hello!!" in response.text

    @pytest.mark.asyncio
    async def test_path_as_view(self, test_client):
        response = await test_client.get("/response/hello")
        assert response.status_code == 200
        assert "hello!!" in response.text


class TestStaticResources:
    @pytest.mark.asyncio
    async def test_index(self, test_client):
        response = await test_client.get("/")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "/hello-basic" in response.text

    @pytest.mark.asyncio
    async def test_hello_form(self, test_client):
        response = await test_client.get("/basic/hello-form.html")
        assert response.status_code == 200
        assert "/request-param-v1" in response.text

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_client):
        response = await test_client.get("/no-such-page")
        assert response.status_code == 404
