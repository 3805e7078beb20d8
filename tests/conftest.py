"""
Shared fixtures: an in-process fake StreamSend API.

The fake server is an `httpx.MockTransport` handler. Unregistered routes answer
`404 Page not found.` and requests without the expected Basic credentials
answer `401`, so every test also exercises authentication.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Callable, Iterator

import httpx
import pytest

from streamsend.adapters.api import ApiContext, configure, reset_context
from streamsend.core.config import AppSettings
from streamsend.core.domain.models import Credentials

USERNAME = "scott"
PASSWORD = "topsecret"
HOST = "test.host"

AUDIENCES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<audiences type="array">
  <audience>
    <id type="integer">2</id>
  </audience>
</audiences>
"""

PEOPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<people type="array">
  <person>
    <id type="integer">2</id>
    <email-address>scott@gmail.com</email-address>
    <created-at type="datetime">2009-09-18T01:27:05Z</created-at>
  </person>
</people>
"""

EMPTY_PEOPLE_XML = """<?xml version="1.0" encoding="UTF-8"?>
<people type="array"/>
"""


Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class FakeApi:
    """Route table keyed by (method, path, query params)."""

    routes: dict[tuple[str, str, frozenset], Handler] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        body: str = "",
        headers: dict[str, str] | None = None,
        params: dict[str, str] | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, text=body, headers=headers)

        self.add_handler(method, path, respond, params=params)

    def add_handler(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        params: dict[str, str] | None = None,
    ) -> None:
        key = (method.upper(), path, frozenset((params or {}).items()))
        self.routes[key] = handler

    def paths(self, method: str | None = None) -> list[str]:
        return [r.url.path for r in self.requests if method is None or r.method == method]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        expected = "Basic " + base64.b64encode(f"{USERNAME}:{PASSWORD}".encode()).decode()
        if request.headers.get("authorization") != expected:
            return httpx.Response(401, text="HTTP Basic: Access denied.")

        key = (request.method, request.url.path, frozenset(request.url.params.items()))
        handler = self.routes.get(key)
        if handler is None:
            return httpx.Response(404, text="Page not found.")
        return handler(request)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings() -> AppSettings:
    """Settings isolated from the developer's .env files."""
    return AppSettings(_env_file=None, host=HOST)


@pytest.fixture
def api() -> FakeApi:
    """Fake server with one audience (id 2) registered."""
    fake = FakeApi()
    fake.add("GET", "/audiences.xml", body=AUDIENCES_XML)
    return fake


@pytest.fixture
def context(api: FakeApi, settings: AppSettings) -> ApiContext:
    """Explicit context wired to the fake server."""
    credentials = Credentials(username=USERNAME, password=PASSWORD, host=HOST)
    return ApiContext.from_settings(
        settings,
        credentials=credentials,
        http_transport=httpx.MockTransport(api),
    )


@pytest.fixture
def default_context(api: FakeApi, settings: AppSettings) -> Iterator[ApiContext]:
    """Process-wide context installed with `configure()`."""
    context = configure(
        USERNAME,
        PASSWORD,
        HOST,
        settings=settings,
        http_transport=httpx.MockTransport(api),
    )
    yield context
    reset_context()
