"""Shared test fixtures for cloudcontrol.

Provides a scripted fake of the cloudControl API built on
:class:`httpx.MockTransport`, ready-made settings, and automatic reset of
the global output manager.
"""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any, Union

import httpx
import pytest

from cloudcontrol.models import ClientSettings
from cloudcontrol.output import OutputManager, reset_output, set_output


@pytest.fixture(autouse=True)
def _plain_output() -> None:
    """Install a colourless, non-verbose output manager for every test."""
    set_output(OutputManager(no_color=True))
    yield
    reset_output()


class FakeAPI:
    """Scripted cloudControl server.

    Replies are queued per ``(method, path)``; the last queued reply for a
    route is repeated once the queue is drained.  ``POST /token/`` answers
    with ``{"token": "tok-<n>"}`` unless scripted otherwise.  Every request
    is recorded in :attr:`calls`.
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self._replies: dict[tuple[str, str], list[tuple[int, Any]]] = defaultdict(list)
        self._issued = 0

    def reply(self, method: str, path: str, body: Union[Any, str], status_code: int = 200) -> FakeAPI:
        self._replies[(method, path)].append((status_code, body))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        key = (request.method, request.url.path)
        queue = self._replies.get(key)
        if queue:
            status_code, body = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(body, str):
                return httpx.Response(status_code, text=body)
            return httpx.Response(status_code, json=body)
        if key == ("POST", "/token/"):
            self._issued += 1
            return httpx.Response(200, json={"token": f"tok-{self._issued}"})
        return httpx.Response(200, json={"method": request.method, "path": request.url.path})

    @property
    def transport(self) -> httpx.MockTransport:
        """Usable by both the sync and the async client."""
        return httpx.MockTransport(self.handler)

    def summary(self) -> list[tuple[str, str]]:
        """``(method, path)`` of every recorded request, in order."""
        return [(r.method, r.url.path) for r in self.calls]


@pytest.fixture
def api() -> FakeAPI:
    return FakeAPI()


@pytest.fixture
def settings(tmp_path: Path) -> ClientSettings:
    """Unauthenticated settings with credentials and an isolated token cache."""
    return ClientSettings(
        email="dev@example.com",
        password="s3cret",
        token_cache_path=tmp_path / "token.json",
    )
