"""Webpage fetching and content extraction."""

from searchkit.tools.webpage.batch import MAX_BATCH_URLS, batch_extract
from searchkit.tools.webpage.client import extract_page
from searchkit.tools.webpage.extractor import extract_content
from searchkit.tools.webpage.fetch import FetchClient, FixtureFetchClient, HttpFetchClient
from searchkit.tools.webpage.models import (
    BatchResult,
    ExtractionFailure,
    PageContent,
    PageStats,
    RawPage,
)

__all__ = [
    "MAX_BATCH_URLS",
    "BatchResult",
    "ExtractionFailure",
    "FetchClient",
    "FixtureFetchClient",
    "HttpFetchClient",
    "PageContent",
    "PageStats",
    "RawPage",
    "batch_extract",
    "extract_content",
    "extract_page",
]
