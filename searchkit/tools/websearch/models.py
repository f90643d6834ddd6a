"""Search query and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from searchkit.errors import (
    EmptyQueryError,
    InvalidResultCountError,
    InvalidSafeSearchError,
)

SafeSearchLevel = Literal["off", "medium", "high"]
SAFE_SEARCH_LEVELS: tuple[str, ...] = ("off", "medium", "high")
DEFAULT_SAFE_SEARCH: SafeSearchLevel = "off"
MIN_RESULTS = 1
MAX_RESULTS = 10


@dataclass(slots=True, frozen=True)
class SearchCredentials:
    """API key and search engine id (``cx``). Either may be empty."""

    api_key: str = ""
    search_engine_id: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.api_key and self.search_engine_id)


@dataclass(slots=True, frozen=True)
class SearchQuery:
    """A validated-before-use search request."""

    text: str
    result_count: int = 5
    date_restrict: str | None = None
    language: str | None = None
    country: str | None = None
    safe_search: str | None = None

    def validate(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise EmptyQueryError()

        count = self.result_count
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidResultCountError(count)
        if count < MIN_RESULTS or count > MAX_RESULTS:
            raise InvalidResultCountError(count)

        if self.safe_search is not None and self.safe_search not in SAFE_SEARCH_LEVELS:
            raise InvalidSafeSearchError(self.safe_search)

    def to_params(self, credentials: SearchCredentials) -> dict[str, Any]:
        """Map onto Custom Search API query parameters; unset filters are omitted."""
        params: dict[str, Any] = {
            "key": credentials.api_key,
            "cx": credentials.search_engine_id,
            "q": self.text,
            "num": self.result_count,
        }
        if self.date_restrict:
            params["dateRestrict"] = self.date_restrict
        if self.language:
            params["lr"] = f"lang_{self.language}"
        if self.country:
            params["cr"] = f"country{self.country.upper()}"
        params["safe"] = self.safe_search or DEFAULT_SAFE_SEARCH
        return params


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Normalized search result item."""

    title: str
    link: str
    snippet: str = ""
    published_date: str = ""
    source: str = ""
    pagemap: dict[str, Any] | None = field(default=None, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "snippet": self.snippet,
            "pagemap": self.pagemap,
            "datePublished": self.published_date,
            "source": self.source,
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "SearchResult":
        pagemap = item.get("pagemap")
        return cls(
            title=str(item.get("title") or ""),
            link=str(item.get("link") or ""),
            snippet=str(item.get("snippet") or ""),
            published_date=_published_date(pagemap),
            source=str(item.get("displayLink") or ""),
            pagemap=pagemap if isinstance(pagemap, dict) else None,
        )


def _published_date(pagemap: Any) -> str:
    if not isinstance(pagemap, dict):
        return ""
    metatags = pagemap.get("metatags")
    if not isinstance(metatags, list) or not metatags or not isinstance(metatags[0], dict):
        return ""
    return str(metatags[0].get("article:published_time") or "")
