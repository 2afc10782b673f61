"""Search-related models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OrganicEntry(BaseModel):
    """A single organic result, as ranked by the provider."""

    model_config = ConfigDict(extra="ignore")

    link: str
    title: str
    description: str
    rank: int = Field(ge=0)
    global_rank: int = Field(ge=0)


class SearchResult(BaseModel):
    """Organic results of one search, in provider rank order."""

    model_config = ConfigDict(extra="ignore")

    organic: list[OrganicEntry]
