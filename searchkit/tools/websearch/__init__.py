"""Google Custom Search client."""

from searchkit.tools.websearch.client import credentials_from_config, search
from searchkit.tools.websearch.models import (
    SAFE_SEARCH_LEVELS,
    SearchCredentials,
    SearchQuery,
    SearchResult,
)

__all__ = [
    "SAFE_SEARCH_LEVELS",
    "SearchCredentials",
    "SearchQuery",
    "SearchResult",
    "credentials_from_config",
    "search",
]
