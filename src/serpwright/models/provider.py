"""Provider request body."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ProviderRequest(BaseModel):
    """Body of a request to the provider's `/request` endpoint.

    Attributes:
        zone: Provider zone selecting the capability and account permissions.
        url: Target URL. A search URL for SERP zones, a page URL for unlocker zones.
        format: Response shape selector (`raw` or `json`).
        data_format: Optional content encoding selector such as `markdown`.
    """

    model_config = ConfigDict(frozen=True)

    zone: str
    url: str
    format: str
    data_format: str | None = None

    def to_wire(self) -> dict[str, Any]:
        """JSON body with unset optional fields left out rather than sent as null."""

        return self.model_dump(mode="json", exclude_none=True)
