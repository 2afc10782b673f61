"""Shared fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable, Iterator

import httpx
import pytest

from serpwright.gateway import HttpGateway

ENDPOINT = "https://api.provider.test/request"

Handler = Callable[[httpx.Request], httpx.Response]


class ProviderStub:
    """Records provider requests and answers them with a handler."""

    def __init__(self, handler: Handler) -> None:
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture
def make_gateway() -> Iterator[Callable[[Handler], tuple[HttpGateway, ProviderStub]]]:
    gateways: list[HttpGateway] = []

    def factory(handler: Handler) -> tuple[HttpGateway, ProviderStub]:
        stub = ProviderStub(handler)
        gateway = HttpGateway("test-key", endpoint=ENDPOINT, transport=httpx.MockTransport(stub))
        gateways.append(gateway)
        return gateway, stub

    yield factory

    for gateway in gateways:
        gateway.close()
