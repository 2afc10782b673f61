from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PageContent(BaseModel):
    """A fetched page rendered as markdown."""

    model_config = ConfigDict(extra="ignore")

    body: str
