"""Concurrent multi-URL extraction with per-URL isolation."""

from __future__ import annotations

import asyncio

from loguru import logger

from searchkit.errors import ExtractionError, LimitExceededError
from searchkit.tools.webpage.client import extract_page
from searchkit.tools.webpage.extractor import PREVIEW_CHARS
from searchkit.tools.webpage.fetch import FetchClient
from searchkit.tools.webpage.models import BatchResult, ExtractionFailure, PageContent

MAX_BATCH_URLS = 5


async def batch_extract(
    urls: list[str],
    fetcher: FetchClient,
    *,
    max_urls: int = MAX_BATCH_URLS,
    preview_chars: int = PREVIEW_CHARS,
) -> BatchResult:
    """
    Extract several pages concurrently.

    Args:
        urls: Page URLs. Duplicates share one result slot.
        fetcher: Fetch client used for every URL.
        max_urls: Upper bound on ``len(urls)``.
        preview_chars: Length of each page's preview prefix.

    Returns:
        One entry per distinct input URL: its PageContent, or an
        ExtractionFailure holding only the error message.

    Raises:
        LimitExceededError: More than ``max_urls`` URLs were given. Nothing is
            fetched in that case.
    """
    if len(urls) > max_urls:
        raise LimitExceededError(len(urls), max_urls)

    unique_urls = list(dict.fromkeys(urls))
    logger.debug("Batch extracting {} URL(s)", len(unique_urls))

    async def _one(url: str) -> PageContent | ExtractionFailure:
        try:
            return await extract_page(url, fetcher, preview_chars=preview_chars)
        except ExtractionError as e:
            return ExtractionFailure(url=url, error=e.message)
        except Exception as e:
            logger.error("Unexpected batch failure for {}: {}", url, e)
            return ExtractionFailure(url=url, error=ExtractionError.wrap(url, e).message)

    outcomes = await asyncio.gather(*(_one(url) for url in unique_urls))

    results: BatchResult = {}
    for url, outcome in zip(unique_urls, outcomes):
        results[url] = outcome
    return results


def successful_urls(results: BatchResult) -> list[str]:
    return [url for url, item in results.items() if isinstance(item, PageContent)]
