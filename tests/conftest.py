"""Shared fixtures: a fake OpenWeather behind the transport's urlopen."""

from __future__ import annotations

import io
import json as jsonlib
from typing import Any
from urllib.error import HTTPError

import pytest

from core import transport
from core.config import WeatherSettings


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body
        self.closed = False

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed = True


class FakeProvider:
    """Routes requests by URL fragment to canned bodies, statuses or errors.

    Routes are matched in registration order, so register the more specific
    fragment first ("/geo/1.0/direct" before "onecall").
    """

    def __init__(self) -> None:
        self.routes: list[tuple[str, int, bytes, BaseException | None]] = []
        self.calls: list[str] = []
        self.timeouts: list[float | None] = []

    def add(
        self,
        fragment: str,
        *,
        json: Any = None,
        text: str | None = None,
        status: int = 200,
        exc: BaseException | None = None,
    ) -> None:
        body = text if text is not None else jsonlib.dumps(json)
        self.routes.append((fragment, status, body.encode("utf-8"), exc))

    def __call__(self, request, timeout=None):
        url = getattr(request, "full_url", request)
        self.calls.append(url)
        self.timeouts.append(timeout)
        for fragment, status, body, exc in self.routes:
            if fragment not in url:
                continue
            if exc is not None:
                raise exc
            if status >= 400:
                raise HTTPError(url, status, "error", None, io.BytesIO(body))
            return FakeResponse(body)
        raise AssertionError(f"unexpected request: {url}")


@pytest.fixture
def provider(monkeypatch) -> FakeProvider:
    fake = FakeProvider()
    monkeypatch.setattr(transport, "urlopen", fake)
    return fake


@pytest.fixture
def settings() -> WeatherSettings:
    return WeatherSettings(api_key="test-key")
