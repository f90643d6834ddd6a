"""Web tools: google_search, extract_webpage_content, extract_multiple_webpages."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from searchkit.errors import (
    ExtractionError,
    InvalidUrlError,
    LimitExceededError,
    WebToolError,
    bilingual,
    render_error,
)
from searchkit.tools.base import Tool, ToolResponse
from searchkit.tools.webpage.batch import batch_extract, successful_urls
from searchkit.tools.webpage.client import extract_page
from searchkit.tools.webpage.fetch import FetchClient, HttpFetchClient
from searchkit.tools.webpage.models import batch_to_dict
from searchkit.tools.webpage.safety import find_invalid_urls, validate_url
from searchkit.tools.websearch.client import credentials_from_config, search
from searchkit.tools.websearch.models import SAFE_SEARCH_LEVELS, SearchQuery

if TYPE_CHECKING:
    from searchkit.config.schema import SearchToolConfig, WebpageToolConfig

_NOTHING_EXTRACTED = bilingual(
    "どのURLからもコンテンツを抽出できませんでした。よくある問題:\n"
    "- ページが認証を必要とする\n"
    "- ページが公開されていない\n"
    "- コンテンツが動的に読み込まれる\n"
    "- URLがHTML以外のリソースを指している\n",
    "Could not extract content from any of the provided URLs. Common issues:\n"
    "- Pages require authentication\n"
    "- Pages are not publicly accessible\n"
    "- Content is dynamically loaded\n"
    "- URLs point to non-HTML resources",
)


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _default_fetcher(config: WebpageToolConfig) -> FetchClient:
    return HttpFetchClient(user_agent=config.user_agent, timeout=config.timeout)


class GoogleSearchTool(Tool):
    """Search Google via the Custom Search JSON API."""

    name = "google_search"
    description = (
        "Search Google and return relevant results from the web. "
        "Results include titles, snippets, and URLs."
    )
    parameters = {
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "Search query - be specific and use quotes for exact matches.",
            },
            "num_results": {
                "type": "integer",
                "description": "Number of results to return (default: 5, max: 10).",
            },
            "date_restrict": {
                "type": "string",
                "description": (
                    "Restrict results to a time period. Format: [d|w|m|y][number], "
                    'e.g. "d1" (past day), "w2" (past 2 weeks), "m3" (past 3 months).'
                ),
            },
            "language": {
                "type": "string",
                "description": 'ISO 639-1 language code, e.g. "en", "ja", "de".',
            },
            "country": {
                "type": "string",
                "description": 'ISO 3166-1 alpha-2 country code, e.g. "us", "uk", "jp".',
            },
            "safe_search": {
                "type": "string",
                "enum": list(SAFE_SEARCH_LEVELS),
                "description": 'Safe search level: "off", "medium" or "high".',
            },
        },
        "required": ["query"],
    }

    def __init__(self, search_config: SearchToolConfig | None = None):
        from searchkit.config.schema import SearchToolConfig

        self.config = search_config or SearchToolConfig()
        self.credentials = credentials_from_config(self.config)

    async def execute(
        self,
        query: str,
        num_results: int | None = None,
        date_restrict: str | None = None,
        language: str | None = None,
        country: str | None = None,
        safe_search: str | None = None,
        **kwargs: Any,
    ) -> ToolResponse:
        search_query = SearchQuery(
            text=query,
            result_count=self.config.default_num_results if num_results is None else num_results,
            date_restrict=date_restrict,
            language=language,
            country=country,
            safe_search=safe_search,
        )
        try:
            results = await search(
                search_query,
                self.credentials,
                base_url=self.config.base_url,
                timeout=self.config.timeout,
            )
        except WebToolError as e:
            return ToolResponse.error(render_error(e, "検索", "Search"))

        return ToolResponse.ok(_dump([result.to_dict() for result in results]))


class ExtractWebpageTool(Tool):
    """Extract readable content from one webpage."""

    name = "extract_webpage_content"
    description = (
        "Extract and analyze content from a webpage, converting it to readable text. "
        "This tool fetches the main content while removing ads, navigation elements, "
        "and other clutter."
    )
    parameters = {
        "type": "object",
        "properties": {
            "url": {
                "type": "string",
                "description": (
                    "Full URL of the webpage to extract content from "
                    "(must start with http:// or https://)."
                ),
            },
        },
        "required": ["url"],
    }

    def __init__(
        self,
        webpage_config: WebpageToolConfig | None = None,
        fetcher: FetchClient | None = None,
    ):
        from searchkit.config.schema import WebpageToolConfig

        self.config = webpage_config or WebpageToolConfig()
        self.fetcher = fetcher or _default_fetcher(self.config)

    async def execute(self, url: str, **kwargs: Any) -> ToolResponse:
        ok, reason = validate_url(url)
        if not ok:
            return ToolResponse.error(InvalidUrlError(url, reason).message)

        try:
            content = await extract_page(url, self.fetcher, preview_chars=self.config.preview_chars)
        except ExtractionError as e:
            return ToolResponse.error(
                render_error(e, "ウェブページの内容抽出", "Webpage content extraction")
            )

        return ToolResponse.ok(_dump(content.to_dict()))


class ExtractMultipleWebpagesTool(Tool):
    """Extract content from several webpages concurrently."""

    name = "extract_multiple_webpages"
    description = (
        "Extract and analyze content from multiple webpages in a single request. "
        "Limited to 5 URLs per request to maintain performance."
    )
    parameters = {
        "type": "object",
        "properties": {
            "urls": {
                "type": "array",
                "items": {"type": "string"},
                "minItems": 1,
                "description": (
                    "Array of webpage URLs to extract content from. Each URL must be public "
                    "and start with http:// or https://. Maximum 5 URLs per request."
                ),
            },
        },
        "required": ["urls"],
    }

    def __init__(
        self,
        webpage_config: WebpageToolConfig | None = None,
        fetcher: FetchClient | None = None,
    ):
        from searchkit.config.schema import WebpageToolConfig

        self.config = webpage_config or WebpageToolConfig()
        self.fetcher = fetcher or _default_fetcher(self.config)

    async def execute(self, urls: list[str], **kwargs: Any) -> ToolResponse:
        limit = self.config.max_batch_urls
        if len(urls) > limit:
            return ToolResponse.error(LimitExceededError(len(urls), limit).message)

        invalid = find_invalid_urls(urls)
        if invalid:
            listed = ", ".join(invalid)
            return ToolResponse.error(
                bilingual(
                    f"以下のURLの形式が無効です: {listed}\n"
                    "すべてのURLはhttp://またはhttps://で始まる必要があります。",
                    f"Invalid URL format for: {listed}\n"
                    "All URLs must start with http:// or https:// and be properly formatted.",
                )
            )

        try:
            results = await batch_extract(
                urls,
                self.fetcher,
                max_urls=limit,
                preview_chars=self.config.preview_chars,
            )
        except WebToolError as e:
            return ToolResponse.error(
                render_error(e, "複数ウェブページの内容一括抽出", "Batch webpage extraction")
            )

        if not successful_urls(results):
            return ToolResponse.error(_NOTHING_EXTRACTED)

        return ToolResponse.ok(_dump(batch_to_dict(results)))
