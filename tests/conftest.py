"""Pytest fixtures: a scripted httpx transport and clients wired to it."""

from typing import Any, List, Optional

import httpx
import pytest

from strapi_client.client import StrapiClient

BASE_URL = "http://localhost"
RESOURCE = "test-entities"
TOKEN = "mock-token"


class ScriptedTransport:
    """Replays queued responses in order and records every request."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._queue: List[Any] = []

    def reply(self, status: int = 200, json: Any = None, content: Optional[bytes] = None) -> "ScriptedTransport":
        if content is not None:
            self._queue.append(httpx.Response(status, content=content))
        else:
            self._queue.append(httpx.Response(status, json=json))
        return self

    def fail(self, exc_factory) -> "ScriptedTransport":
        self._queue.append(exc_factory)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._queue:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        item = self._queue.pop(0)
        if callable(item) and not isinstance(item, httpx.Response):
            raise item(request)
        return item

    @property
    def urls(self) -> List[str]:
        return [str(r.url) for r in self.requests]

    @property
    def methods(self) -> List[str]:
        return [r.method for r in self.requests]


@pytest.fixture
def transport():
    return ScriptedTransport()


@pytest.fixture
def http(transport):
    with httpx.Client(transport=httpx.MockTransport(transport)) as client:
        yield client


@pytest.fixture
def client(http):
    return StrapiClient(BASE_URL, RESOURCE, token=TOKEN, http=http)


@pytest.fixture
def make_client(http):
    def _make(**kwargs):
        kwargs.setdefault("http", http)
        return StrapiClient(BASE_URL, RESOURCE, **kwargs)

    return _make
