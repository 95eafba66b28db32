"""
mvcbasic — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Core tests build requests by hand; endpoint tests talk to the app
       through ASGI without starting a server.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── make_request: Builds a core Request from raw pieces
    ├── json_request: Builds a POST request with a JSON body
    ├── template_dir: Temporary template directory with response/hello.html
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os
from typing import Iterable, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ.pop("DEFAULT_CHARSET", None)
os.environ.pop("TEMPLATE_DIR", None)

from mvcbasic.core.request import Request  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_request():
    """
    Provides a factory for core Requests.

    Usage:
        def test_extract(make_request):
            request = make_request(query_string="username=hello&age=20")
    """

    def factory(
        method: str = "GET",
        path: str = "/",
        query_string: str = "",
        headers: Iterable[Tuple[str, str]] = (),
        body: bytes = b"",
    ) -> Request:
        return Request.build(
            method=method,
            path=path,
            query_string=query_string,
            headers=list(headers),
            body=body,
        )

    return factory


@pytest.fixture
def json_request(make_request):
    """Factory for POST requests carrying a JSON body."""

    def factory(body, content_type: str = "application/json") -> Request:
        if isinstance(body, str):
            body = body.encode("utf-8")
        return make_request(
            method="POST",
            path="/request-body-json-v3",
            headers=[("Content-Type", content_type)],
            body=body,
        )

    return factory


@pytest.fixture
def template_dir(tmp_path):
    """
    Provides a throwaway template directory.

    Layout:
        response/hello.html   → "<p>{{ data }}</p>"
    """
    response_dir = tmp_path / "response"
    response_dir.mkdir()
    (response_dir / "hello.html").write_text("<p>{{ data }}</p>", encoding="utf-8")
    return tmp_path


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to our FastAPI app.
    How:     Uses ASGITransport to route requests directly to the app.

    Usage:
        async def test_hello(test_client):
            response = await test_client.get("/hello-basic")
            assert response.status_code == 200
    """
    from mvcbasic.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
