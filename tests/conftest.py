"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Union

import httpx
import pytest

from sikka.auth.credentials import SikkaClientCredentials
from sikka.client import SikkaClient
from sikka.logger import reset_logger

BASE_URL = "https://api.sikkasoft.test"

Reply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeSikka:
    """Answers requests from an ``httpx.MockTransport`` with queued replies."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[Reply] = []

    def queue(self, *replies: Reply) -> None:
        self._replies.extend(replies)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    @property
    def key_requests(self) -> list[httpx.Request]:
        return self.requests_to("/v4/request_key")


class RecordingLogger:
    """Logger that keeps every entry for assertions."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, str, Any]] = []

    def debug(self, message, meta=None):
        self.entries.append(("debug", message, meta))

    def info(self, message, meta=None):
        self.entries.append(("info", message, meta))

    def warn(self, message, meta=None):
        self.entries.append(("warn", message, meta))

    def error(self, message, meta=None):
        self.entries.append(("error", message, meta))

    def messages(self, level: str = "debug") -> list[str]:
        return [m for lvl, m, _ in self.entries if lvl == level]


def key_response(
    expires_in: timedelta = timedelta(hours=24),
    request_key: str = "test-request-key",
    refresh_key: str = "test-refresh-key",
) -> httpx.Response:
    """Successful request_key reply expiring ``expires_in`` from now."""
    now = datetime.now(timezone.utc)
    end_time = now + expires_in
    return httpx.Response(
        200,
        json={
            "href": f"{BASE_URL}/v4/request_key",
            "request_key": request_key,
            "refresh_key": refresh_key,
            "start_time": now.isoformat(),
            "end_time": end_time.isoformat(),
            "expires_in": str(int(expires_in.total_seconds())),
            "issued_to": "test-office-id",
            "request_count": "0",
            "status": "active",
            "scope": "full",
            "domain": "test-domain",
        },
    )


def envelope(items: list[dict], **extra: Any) -> httpx.Response:
    """List endpoint reply wrapping ``items``."""
    body = {
        "execution_time": "12",
        "items": items,
        "limit": "500",
        "offset": "0",
        "pagination": {
            "current": "",
            "first": "",
            "last": "",
            "next": "",
            "previous": "",
        },
        "total_count": str(len(items)),
    }
    body.update(extra)
    return httpx.Response(200, json=body)


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    reset_logger()


@pytest.fixture
def credentials() -> SikkaClientCredentials:
    return SikkaClientCredentials(
        app_id="test-app-id",
        app_key="test-app-key",
        office_id="test-office-id",
        secret_key="test-secret-key",
    )


@pytest.fixture
def fake() -> FakeSikka:
    return FakeSikka()


@pytest.fixture
async def http_client(fake):
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    yield client
    await client.aclose()


@pytest.fixture
def client(credentials, http_client) -> SikkaClient:
    return SikkaClient(credentials, base_url=BASE_URL, http_client=http_client)


@pytest.fixture
async def authenticated_client(client, fake) -> SikkaClient:
    fake.queue(key_response())
    await client.authenticate()
    return client
