"""OpenAI-compatible LLM client.

This wraps the `openai` Python SDK and provides a minimal interface for chat completions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from openai import OpenAI

from serpwright.config import ConfigurationError
from serpwright.logging import get_logger

logger = get_logger(__name__)

Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """A chat message."""

    role: Role
    content: str


class LLMClient:
    """LLM client using OpenAI-compatible Chat Completions API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str,
        base_url: str | None = None,
        timeout_s: float = 120.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("LLM API key must be a non-empty string.")

        self._model = model
        self._timeout_s = timeout_s
        self._client = OpenAI(api_key=api_key, base_url=base_url)

    @property
    def model(self) -> str:
        return self._model

    def complete(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: str | None = None,
        temperature: float = 0.2,
    ) -> str:
        """Generate a completion.

        Args:
            messages: Chat messages.
            model: Optional model override for this call.
            temperature: Sampling temperature.

        Returns:
            Assistant message content.
        """

        payload: list[dict[str, str]] = [{"role": m.role, "content": m.content} for m in messages]
        resp = self._client.chat.completions.create(
            model=model or self._model,
            messages=payload,
            temperature=temperature,
            timeout=self._timeout_s,
        )
        choice = resp.choices[0]
        if not choice.message or choice.message.content is None:
            logger.warning("LLM returned an empty message", extra={"model": model or self._model})
            return ""
        return choice.message.content
