"""Credential loading.

Secrets are looked up in an ordered chain of sources. The default chain reads a local dotenv
file first and falls back to the process environment; the first non-empty value wins.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Protocol, Sequence

from dotenv import dotenv_values

from serpwright.config import ConfigurationError, Settings
from serpwright.logging import get_logger

logger = get_logger(__name__)

LLM_API_KEY = "OPENAI_API_KEY"
PROVIDER_API_KEY = "BRIGHT_DATA_KEY"


class CredentialSource(Protocol):
    """A place secrets can be read from."""

    label: str

    def get(self, name: str) -> str | None:
        """Return the secret value, or None when this source does not have it."""


class DotenvFileSource:
    """Secrets stored in a dotenv-formatted file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.label = str(path)
        self._values: Mapping[str, str | None] | None = None

    def get(self, name: str) -> str | None:
        if self._values is None:
            self._values = dotenv_values(self.path) if self.path.is_file() else {}
            logger.debug("Credential file read", extra={"path": self.label, "keys": len(self._values)})
        return self._values.get(name)


class EnvironmentSource:
    """Secrets from the process environment."""

    label = "environment"

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def get(self, name: str) -> str | None:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(name)


@dataclass(frozen=True)
class Credentials:
    """The two secrets a run needs."""

    llm_api_key: str
    provider_api_key: str

    def __repr__(self) -> str:
        return "Credentials(llm_api_key=***, provider_api_key=***)"


def default_sources(settings: Settings) -> list[CredentialSource]:
    """File first, then environment."""

    return [DotenvFileSource(settings.credentials_file), EnvironmentSource()]


def resolve_secret(name: str, sources: Sequence[CredentialSource]) -> str:
    """Return the first non-empty value for `name` across `sources`.

    Raises:
        ConfigurationError: If no source provides a non-empty value.
    """

    for source in sources:
        value = source.get(name)
        if value and value.strip():
            logger.debug("Credential resolved", extra={"credential": name, "source": source.label})
            return value.strip()

    labels = " or ".join(source.label for source in sources) or "any source"
    raise ConfigurationError(f"{name} is not set in {labels}")


def load_credentials(sources: Sequence[CredentialSource]) -> Credentials:
    """Resolve both secrets, failing on the first one missing."""

    return Credentials(
        llm_api_key=resolve_secret(LLM_API_KEY, sources),
        provider_api_key=resolve_secret(PROVIDER_API_KEY, sources),
    )
