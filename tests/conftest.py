"""Shared pytest fixtures."""

from __future__ import annotations

import json
import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import requests

from strapi_client.auth import StaticTokenAuth
from strapi_client.client import StrapiClient
from strapi_client.config import Config

if TYPE_CHECKING:
    from collections.abc import Generator

LIST_BODY = {
    "data": [],
    "meta": {"pagination": {"page": 1, "pageSize": 10, "pageCount": 1, "total": 0}},
}
SINGLE_BODY = {"data": {"id": 1, "title": "Test Article"}, "meta": {}}


def make_response(
    status: int = 200,
    body: Any = None,
    headers: dict[str, str] | None = None,
    url: str = "http://localhost:1337/api/articles",
) -> requests.Response:
    """Build a real requests.Response without touching the network.

    ``body`` may be bytes (sent verbatim) or any JSON-serialisable value.
    """
    response = requests.Response()
    response.status_code = status
    if body is None:
        response._content = b""
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers.update(headers or {"Content-Type": "application/json"})
    response.url = url
    return response


class FakeTransport:
    """Records prepared requests and replays canned responses or errors."""

    def __init__(self, *results: Any) -> None:
        self.results = list(results) or [make_response(body=LIST_BODY)]
        self.requests: list[requests.PreparedRequest] = []
        self.calls: list[dict[str, Any]] = []

    @property
    def last(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def send(
        self, request: requests.PreparedRequest, *, timeout: float, verify: bool
    ) -> Any:
        self.requests.append(request)
        self.calls.append({"timeout": timeout, "verify": verify})
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""[server]
base_url = "https://cms.example.com/"
api_path = "/api"
timeout = 10
verify_ssl = false

[auth]
token = "secret-token"

[display]
colored_output = false
""")
    return config_path


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(fake_transport: FakeTransport) -> StrapiClient:
    """Client against http://localhost:1337/api with token ``abc``."""
    return StrapiClient(Config(), transport=fake_transport, auth=StaticTokenAuth("abc"))


@pytest.fixture
def response_factory() -> Any:
    """Return make_response for tests that need custom responses."""
    return make_response


@pytest.fixture
def transport_factory() -> Any:
    """Return the FakeTransport class for tests that script several results."""
    return FakeTransport
