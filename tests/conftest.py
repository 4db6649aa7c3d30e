"""Shared test fixtures — no backend, speech engine or LLM needed."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from datetime import date
from typing import Any

import httpx
import pytest

from geumbok.assistant import Assistant
from geumbok.client import GeumbokClient
from geumbok.ledger import Ledger


class RecordingSpeaker:
    """Speaker stub that remembers everything it was asked to say."""

    def __init__(self) -> None:
        self.spoken: list[tuple[str, Any]] = []
        self.stops = 0

    def speak(self, text: str, options: Any = None) -> None:
        self.spoken.append((text, options))

    def stop(self) -> None:
        self.stops += 1

    @property
    def texts(self) -> list[str]:
        return [text for text, _ in self.spoken]


class FakeBackend:
    """Routes requests to canned responses and records what was sent."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def route(
        self,
        method: str,
        path: str,
        status: int = 200,
        body: Any = None,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if body is None:
                return httpx.Response(status)
            return httpx.Response(status, json=body)

        self.routes[(method, path)] = handler

    def fail(self, method: str, path: str) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        self.routes[(method, path)] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")
        handler = self.routes.get((request.method, path))
        if handler is None:
            return httpx.Response(404, json={"message": "not found"})
        return handler(request)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def speaker() -> RecordingSpeaker:
    return RecordingSpeaker()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend: FakeBackend) -> Iterator[GeumbokClient]:
    c = GeumbokClient(
        base_url="http://backend.test/api/v1",
        token="secret",
        transport=httpx.MockTransport(backend),
    )
    yield c
    c.close()


@pytest.fixture
def assistant(speaker: RecordingSpeaker) -> Assistant:
    return Assistant(speaker=speaker)


@pytest.fixture
def today() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def ledger(today: date) -> Ledger:
    book = Ledger()
    book.add(5000, "커피", "식료품", on=today)
    book.add(12000, "버스카드 충전", "교통비", on=date(2024, 3, 10))
    book.add(30000, "병원", "의료비", on=date(2024, 2, 28))
    book.add(8000, "책", "문화생활", on=date(2023, 12, 24))
    return book
