from __future__ import annotations

import json

import pytest
import requests


class FakeResponse:
    def __init__(self, payload: object = None, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> object:
        return self._payload


class FakeGitLab:
    """Records requests and answers them from a path -> (status, payload) table."""

    def __init__(self, routes: dict[tuple[str, str], tuple[int, object]]) -> None:
        self.routes = routes
        self.calls: list[dict[str, object]] = []

    def _answer(self, method: str, url: str, **kwargs: object) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        path = url.split("/api/v4/", 1)[1]
        if (method, path) not in self.routes:
            return FakeResponse({"message": "404 Not Found"}, 404)
        status, payload = self.routes[(method, path)]
        if isinstance(payload, Exception):
            raise payload
        return FakeResponse(payload, status)

    def get(self, url: str, **kwargs: object) -> FakeResponse:
        return self._answer("GET", url, **kwargs)

    def post(self, url: str, **kwargs: object) -> FakeResponse:
        return self._answer("POST", url, **kwargs)


@pytest.fixture
def fake_gitlab(monkeypatch: pytest.MonkeyPatch):
    def install(routes: dict[tuple[str, str], tuple[int, object]]) -> FakeGitLab:
        fake = FakeGitLab(routes)
        monkeypatch.setattr(requests, "get", fake.get)
        monkeypatch.setattr(requests, "post", fake.post)
        return fake

    return install


PROJECTS = [
    {"id": 1, "name": "Website", "path_with_namespace": "team/website"},
    {"id": 2, "name": "Backend", "path_with_namespace": "team/backend"},
]
MEMBERS = [{"id": 11, "username": "alice", "name": "Alice"}, {"id": 12, "username": "bob", "name": "Bob"}]
LABELS = [{"id": 21, "name": "bug"}, {"id": 22, "name": "Feature"}]
