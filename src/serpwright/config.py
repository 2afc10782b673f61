"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `SERPWRIGHT_ENV_FILE` to point to it.

Secrets are not part of :class:`Settings`; see :mod:`serpwright.credentials`.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from serpwright.prompts import DEFAULT_SYSTEM_PROMPT


class ConfigurationError(ValueError):
    """A required setting or credential is missing or invalid."""


class Settings(BaseSettings):
    """serpwright settings.

    All fields are environment-configurable. Prefix is `SERPWRIGHT_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="SERPWRIGHT_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")
    credentials_file: Path = Field(default=Path("API_KEY.env"))

    # Provider
    provider_endpoint: str = Field(default="https://api.brightdata.com/request")
    search_zone: str = Field(default="serp_api1")
    scrape_zone: str = Field(default="web_unlocker1")
    search_engine_url: str = Field(default="https://www.google.com/search")
    scrape_max_chars: int = Field(default=50_000, ge=1)
    http_timeout_s: float = Field(default=30.0, gt=0.0)

    # LLM
    llm_model: str = Field(default="gpt-4o-mini")
    llm_base_url: str | None = Field(default=None)
    llm_timeout_s: float = Field(default=120.0, gt=0.0)

    # Agent
    agent_max_iterations: int = Field(default=5, ge=1, le=50)
    system_prompt: str = Field(default=DEFAULT_SYSTEM_PROMPT)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("SERPWRIGHT_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
