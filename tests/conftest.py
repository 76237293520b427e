"""Pytest configuration and fixtures."""

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from gitbook_mcp.client import GitBookClient
from gitbook_mcp.config import GitBookConfig

TEST_TOKEN = "gb_api_test_token"


class FakeGitBook:
    """In-memory stand-in for the GitBook API, served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[str, httpx.Response] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        path: str,
        payload: Any = None,
        *,
        status_code: int = 200,
        content: bytes | None = None,
    ) -> None:
        """Serve ``payload`` as JSON (or raw ``content``) for an API path such as ``/orgs``."""
        if content is None:
            content = json.dumps(payload).encode()
        self.routes[f"/v1{path}"] = httpx.Response(status_code, content=content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.routes.get(request.url.path)
        if response is None:
            return httpx.Response(
                404, json={"error": {"code": 404, "message": f"No route {request.url.path}"}}
            )
        return httpx.Response(response.status_code, content=response.content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def gitbook() -> FakeGitBook:
    """Create a fake GitBook API with no routes."""
    return FakeGitBook()


@pytest.fixture
def config() -> GitBookConfig:
    """Configuration with a token and no default identifiers."""
    return GitBookConfig(api_token=TEST_TOKEN)


@pytest.fixture
def make_client(gitbook: FakeGitBook) -> Callable[[GitBookConfig], GitBookClient]:
    """Build clients that talk to the fake API."""

    def factory(config: GitBookConfig) -> GitBookClient:
        return GitBookClient(config, transport=gitbook.transport)

    return factory


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run in an empty directory with no GITBOOK_* variables set."""
    for name in (
        "GITBOOK_API_TOKEN",
        "GITBOOK_ORGANIZATION_ID",
        "GITBOOK_SPACE_ID",
        "GITBOOK_LOG_LEVEL",
        "GITBOOK_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def reset_logging() -> Generator[None, None, None]:
    """Restore default logging after a test that configures it."""
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
