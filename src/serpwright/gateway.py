"""HTTP gateway to the scraping provider.

A single :class:`HttpGateway` is built per process and shared by every tool. It is bound to the
provider endpoint and the bearer token, and keeps one pooled `httpx.Client`.

Failures are never retried here. They surface as one of:

- :class:`TransportError`: the request did not complete (DNS, connect, timeout, ...).
- :class:`ProviderError`: the provider answered with a non-2xx status.
- :class:`DecodeError`: the body is not JSON or does not match the expected model.
"""

from __future__ import annotations

import time
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from serpwright.config import ConfigurationError
from serpwright.logging import get_logger
from serpwright.models.provider import ProviderRequest

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_ENDPOINT = "https://api.brightdata.com/request"

# Upper bound on how much of an error body is kept for diagnostics.
_ERROR_BODY_MAX_CHARS = 2000


class GatewayError(RuntimeError):
    pass


class TransportError(GatewayError):
    pass


class ProviderError(GatewayError):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"provider returned HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class DecodeError(GatewayError):
    pass


class HttpGateway:
    """Configured HTTP client for the provider's `/request` endpoint."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            api_key: Provider API key, sent as a bearer token.
            endpoint: Provider request endpoint.
            timeout_s: Per-request timeout.
            transport: Optional transport override (tests use `httpx.MockTransport`).

        Raises:
            ConfigurationError: If `api_key` is empty.
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("Provider API key must be a non-empty string.")

        self._endpoint = endpoint
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout_s),
            headers={
                "Authorization": f"Bearer {api_key.strip()}",
                "Content-Type": "application/json",
            },
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def post(self, request: ProviderRequest) -> httpx.Response:
        """Send one request to the provider and return the raw response."""

        started = time.monotonic()
        try:
            resp = self._client.post(self._endpoint, json=request.to_wire())
        except httpx.TransportError as e:
            logger.warning(
                "Provider request failed",
                extra={
                    "zone": request.zone,
                    "error_type": type(e).__name__,
                    "elapsed_ms": int((time.monotonic() - started) * 1000),
                },
            )
            raise TransportError(f"provider request failed: {e}") from e

        logger.info(
            "Provider request done",
            extra={
                "zone": request.zone,
                "status_code": resp.status_code,
                "latency_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return resp

    @staticmethod
    def decode(response: httpx.Response, model: type[ModelT]) -> ModelT:
        """Check the status and decode the JSON body into `model`.

        Unknown fields are ignored by the models, missing required fields are not.
        """

        if not response.is_success:
            raise ProviderError(response.status_code, response.text[:_ERROR_BODY_MAX_CHARS])

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"provider response is not a valid {model.__name__}: {e}") from e

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
