from __future__ import annotations

from typing import Any

import pytest


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "", reason: str = "OK") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Minimal stand-in for requests.Session keyed by exact URL.

    A route mapped to an exception raises it, the way a transport failure would.
    """

    def __init__(self, routes: dict[str, FakeResponse | Exception] | None = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[tuple[str, dict[str, str]]] = []

    def get(self, url: str, headers: dict[str, str] | None = None, timeout: float | None = None) -> FakeResponse:
        self.calls.append((url, dict(headers or {})))
        if url not in self.routes:
            return FakeResponse(404, text='{"message": "Not Found"}', reason="Not Found")
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


def dir_item(name: str) -> dict[str, Any]:
    return {"name": name, "path": name, "type": "dir", "download_url": None}


def file_item(name: str) -> dict[str, Any]:
    return {"name": name, "path": name, "type": "file", "download_url": f"https://example.invalid/{name}"}


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()
