"""Single-page pipeline: validate, fetch, extract."""

from __future__ import annotations

from loguru import logger

from searchkit.errors import ExtractionError
from searchkit.tools.webpage.extractor import PREVIEW_CHARS, extract_content
from searchkit.tools.webpage.fetch import FetchClient
from searchkit.tools.webpage.models import PageContent
from searchkit.tools.webpage.safety import ensure_valid_url


async def extract_page(
    url: str,
    fetcher: FetchClient,
    *,
    preview_chars: int = PREVIEW_CHARS,
) -> PageContent:
    """Fetch ``url`` and extract its content.

    Every failure surfaces as an ExtractionError whose ``kind`` is one of
    ``invalid_url``, ``http``, ``fetch`` or ``extraction``.
    """
    try:
        ensure_valid_url(url)
        page = await fetcher.fetch(url)
        return extract_content(page.text, url, preview_chars=preview_chars)
    except Exception as e:
        error = ExtractionError.wrap(url, e)
        logger.warning("Content extraction failed for {} ({}): {}", url, error.kind, e)
        raise error from e
