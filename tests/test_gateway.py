"""Tests for the provider HTTP gateway."""

from __future__ import annotations

import httpx
import pytest

from serpwright.config import ConfigurationError
from serpwright.gateway import DecodeError, HttpGateway, ProviderError, TransportError
from serpwright.models import PageContent, ProviderRequest, SearchResult


def test_empty_api_key_is_rejected() -> None:
    """It should fail at construction time without a key."""

    with pytest.raises(ConfigurationError):
        HttpGateway("")
    with pytest.raises(ConfigurationError):
        HttpGateway("   ")


def test_post_sends_bearer_token_and_json(make_gateway) -> None:
    """It should POST to the endpoint with auth and content-type headers."""

    gateway, stub = make_gateway(lambda request: httpx.Response(200, json={"body": "ok"}))

    request = ProviderRequest(zone="z1", url="https://example.com", format="json", data_format="markdown")
    gateway.post(request)

    sent = stub.requests[0]
    assert sent.method == "POST"
    assert str(sent.url) == gateway.endpoint == "https://api.provider.test/request"
    assert sent.headers["authorization"] == "Bearer test-key"
    assert sent.headers["content-type"] == "application/json"
    assert stub.bodies[0] == {
        "zone": "z1",
        "url": "https://example.com",
        "format": "json",
        "data_format": "markdown",
    }


def test_absent_data_format_is_omitted(make_gateway) -> None:
    """It should leave unset optional fields out instead of sending null."""

    gateway, stub = make_gateway(lambda request: httpx.Response(200, json={"organic": []}))

    gateway.post(ProviderRequest(zone="serp", url="https://www.google.com/search?q=x", format="raw"))

    assert "data_format" not in stub.bodies[0]


def test_gateway_is_reusable_across_calls(make_gateway) -> None:
    gateway, stub = make_gateway(lambda request: httpx.Response(200, json={"body": "ok"}))

    for i in range(3):
        resp = gateway.post(ProviderRequest(zone="z", url=f"https://example.com/{i}", format="json"))
        assert gateway.decode(resp, PageContent).body == "ok"

    assert [b["url"] for b in stub.bodies] == [f"https://example.com/{i}" for i in range(3)]


def test_transport_failure_raises_transport_error(make_gateway) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    gateway, _ = make_gateway(handler)

    with pytest.raises(TransportError):
        gateway.post(ProviderRequest(zone="z", url="https://example.com", format="json"))


def test_timeout_raises_transport_error(make_gateway) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    gateway, _ = make_gateway(handler)

    with pytest.raises(TransportError):
        gateway.post(ProviderRequest(zone="z", url="https://example.com", format="json"))


def test_non_2xx_is_a_provider_error_with_status_and_body() -> None:
    """It should report the HTTP status even when the body is not JSON."""

    response = httpx.Response(403, text="zone not allowed")

    with pytest.raises(ProviderError) as excinfo:
        HttpGateway.decode(response, SearchResult)

    assert excinfo.value.status_code == 403
    assert excinfo.value.body == "zone not allowed"


def test_non_2xx_with_valid_json_is_still_a_provider_error() -> None:
    response = httpx.Response(500, json={"organic": []})

    with pytest.raises(ProviderError) as excinfo:
        HttpGateway.decode(response, SearchResult)

    assert excinfo.value.status_code == 500


def test_malformed_json_is_a_decode_error() -> None:
    response = httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(DecodeError):
        HttpGateway.decode(response, PageContent)


def test_missing_required_field_is_a_decode_error() -> None:
    response = httpx.Response(200, json={"organic": [{"link": "https://example.com", "title": "x"}]})

    with pytest.raises(DecodeError):
        HttpGateway.decode(response, SearchResult)


def test_unknown_fields_are_ignored() -> None:
    """It should tolerate additive provider schema changes."""

    response = httpx.Response(
        200,
        json={
            "general": {"query": "x"},
            "organic": [
                {
                    "link": "https://example.com",
                    "title": "Example",
                    "description": "An example",
                    "rank": 1,
                    "global_rank": 3,
                    "extensions": [{"type": "site_link"}],
                }
            ],
        },
    )

    result = HttpGateway.decode(response, SearchResult)

    assert result.organic[0].global_rank == 3
    assert not hasattr(result.organic[0], "extensions")
