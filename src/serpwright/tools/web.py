"""Web search and page scraping tools backed by the scraping provider."""

from __future__ import annotations

import httpx

from serpwright.config import Settings
from serpwright.gateway import HttpGateway
from serpwright.logging import get_logger
from serpwright.models import PageContent, ProviderRequest, SearchResult
from serpwright.tools.registry import FunctionTool, Tool, ToolDescriptor, ToolParameter

logger = get_logger(__name__)

SEARCH_DESCRIPTOR = ToolDescriptor(
    name="search",
    description="Search for a query on Google.",
    parameters=(ToolParameter(name="query", type="string", description="The query to search"),),
)

SCRAPE_DESCRIPTOR = ToolDescriptor(
    name="scrape",
    description="Scrape a web page for content",
    parameters=(ToolParameter(name="url", type="string", description="The URL to scrape"),),
)


def build_search_url(base_url: str, query: str) -> str:
    """Search engine URL asking the provider for parsed JSON results (`brd_json=1`).

    Query parameters already present on `base_url` are kept.
    """

    return str(httpx.URL(base_url).copy_merge_params({"brd_json": "1", "q": query}))


def truncate_body(body: str, max_chars: int) -> str:
    """Cut `body` to at most `max_chars` characters.

    The cut is a plain slice: no word or sentence boundary handling, no whitespace trimming.
    """

    if max_chars < 1:
        raise ValueError("max_chars must be >= 1")
    if len(body) <= max_chars:
        return body
    return body[:max_chars]


class WebSearchTools:
    """The `search` and `scrape` tools, sharing one gateway."""

    def __init__(
        self,
        gateway: HttpGateway,
        *,
        search_zone: str = "serp_api1",
        scrape_zone: str = "web_unlocker1",
        search_engine_url: str = "https://www.google.com/search",
        scrape_max_chars: int = 50_000,
    ) -> None:
        if scrape_max_chars < 1:
            raise ValueError("scrape_max_chars must be >= 1")
        self._gateway = gateway
        self._search_zone = search_zone
        self._scrape_zone = scrape_zone
        self._search_engine_url = search_engine_url
        self._scrape_max_chars = scrape_max_chars

    @classmethod
    def from_settings(cls, gateway: HttpGateway, settings: Settings) -> WebSearchTools:
        return cls(
            gateway,
            search_zone=settings.search_zone,
            scrape_zone=settings.scrape_zone,
            search_engine_url=settings.search_engine_url,
            scrape_max_chars=settings.scrape_max_chars,
        )

    def search(self, query: str) -> SearchResult:
        """Search Google through the provider's SERP zone.

        Args:
            query: Free-text search query.

        Returns:
            Organic results in provider rank order, unfiltered.
        """

        if not query:
            raise ValueError("query must be a non-empty string")

        request = ProviderRequest(
            zone=self._search_zone,
            url=build_search_url(self._search_engine_url, query),
            format="raw",
        )
        result = self._gateway.decode(self._gateway.post(request), SearchResult)
        logger.info("Search done", extra={"query_len": len(query), "result_count": len(result.organic)})
        return result

    def scrape(self, url: str) -> PageContent:
        """Fetch `url` through the unlocker zone, rendered as markdown.

        The body is cut to the configured maximum length.
        """

        request = ProviderRequest(
            zone=self._scrape_zone,
            url=url,
            format="json",
            data_format="markdown",
        )
        page = self._gateway.decode(self._gateway.post(request), PageContent)
        body = truncate_body(page.body, self._scrape_max_chars)
        if len(body) < len(page.body):
            logger.info(
                "Scraped page truncated",
                extra={"url": url, "original_chars": len(page.body), "max_chars": self._scrape_max_chars},
            )
        return PageContent(body=body)

    def tools(self) -> list[Tool]:
        return [
            FunctionTool(SEARCH_DESCRIPTOR, self.search),
            FunctionTool(SCRAPE_DESCRIPTOR, self.scrape),
        ]
