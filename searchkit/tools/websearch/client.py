"""Search entry point: validation, parameter mapping and response normalization."""

from typing import Any

import httpx
from loguru import logger

from searchkit.config.schema import DEFAULT_SEARCH_BASE_URL, SearchToolConfig
from searchkit.errors import NoResultsError, SearchError
from searchkit.tools.websearch.google import search_google
from searchkit.tools.websearch.models import SearchCredentials, SearchQuery, SearchResult


def credentials_from_config(config: SearchToolConfig) -> SearchCredentials:
    return SearchCredentials(
        api_key=config.api_key,
        search_engine_id=config.search_engine_id,
    )


async def search(
    query: SearchQuery,
    credentials: SearchCredentials,
    *,
    base_url: str = DEFAULT_SEARCH_BASE_URL,
    timeout: float = 10.0,
) -> list[SearchResult]:
    """
    Run a search and return results in upstream order.

    Raises:
        SearchQueryError: The query failed validation (nothing was sent).
        NoResultsError: The response carried no usable ``items`` list.
        SearchError: The upstream call failed.
    """
    query.validate()

    if not credentials.complete:
        logger.warning("Searching without a complete API key / engine id; expect an auth error")

    params = query.to_params(credentials)
    logger.debug("Search request: q={!r} num={}", query.text, query.result_count)

    try:
        payload = await search_google(
            params=params,
            base_url=base_url or DEFAULT_SEARCH_BASE_URL,
            timeout=timeout,
        )
    except httpx.HTTPStatusError as e:
        raise upstream_error(e.response) from e
    except httpx.HTTPError as e:
        raise SearchError(str(e) or type(e).__name__) from e
    except ValueError as e:
        # Body was not valid JSON.
        raise NoResultsError() from e

    return parse_search_items(payload)


def parse_search_items(payload: Any) -> list[SearchResult]:
    """Normalize the ``items`` list; an empty list is a valid result."""
    items = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise NoResultsError()
    return [SearchResult.from_item(item) for item in items]


def upstream_error(response: httpx.Response) -> SearchError:
    """Build a SearchError from a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        body = {}

    info = body.get("error") if isinstance(body, dict) else None
    if not isinstance(info, dict):
        info = {}

    code = info.get("code") or response.status_code
    message = info.get("message") or response.reason_phrase or f"HTTP {response.status_code}"
    details = [
        (str(item.get("reason", "")), str(item.get("message", "")))
        for item in info.get("errors") or []
        if isinstance(item, dict)
    ]
    return SearchError(str(message), code=code, details=details)
