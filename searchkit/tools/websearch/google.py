"""Google Custom Search JSON API adapter."""

from typing import Any

import httpx

from searchkit.config.schema import DEFAULT_SEARCH_BASE_URL


async def search_google(
    *,
    params: dict[str, Any],
    base_url: str = DEFAULT_SEARCH_BASE_URL,
    timeout: float = 10.0,
) -> Any:
    """Call the Custom Search API and return the decoded JSON body."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            base_url,
            params=params,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
        response.raise_for_status()

    return response.json()
