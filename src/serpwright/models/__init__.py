"""Pydantic models used across the project."""

from __future__ import annotations

from serpwright.models.page import PageContent
from serpwright.models.provider import ProviderRequest
from serpwright.models.search import OrganicEntry, SearchResult

__all__ = [
    "OrganicEntry",
    "PageContent",
    "ProviderRequest",
    "SearchResult",
]
