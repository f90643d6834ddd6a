"""Fetch clients: a real httpx client and a fixture-backed one for tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol
from urllib.parse import urlparse

import httpx
from loguru import logger

from searchkit.config.schema import DEFAULT_USER_AGENT
from searchkit.errors import FetchError
from searchkit.tools.webpage.models import RawPage
from searchkit.tools.webpage.safety import ensure_valid_url

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
}


class FetchClient(Protocol):
    """Anything that can turn a URL into raw markup."""

    async def fetch(self, url: str) -> RawPage: ...


class HttpFetchClient:
    """Fetch pages over HTTP with a browser-like identity."""

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 15.0,
    ):
        self.user_agent = user_agent
        self.timeout = timeout

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, **DEFAULT_HEADERS}

    async def fetch(self, url: str) -> RawPage:
        ensure_valid_url(url)
        logger.debug("Fetching {}", url)

        try:
            async with httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(url, status_code=e.response.status_code) from e
        except httpx.HTTPError as e:
            raise FetchError(url, cause=str(e) or type(e).__name__) from e

        return RawPage(
            url=url,
            status_code=response.status_code,
            text=response.text,
            final_url=str(response.url),
        )


def mock_page_html(url: str) -> str:
    """Markup for a generated mock page, keyed on the URL's host."""
    domain = urlparse(url).hostname or url
    return f"""<!DOCTYPE html>
<html>
<head>
<title>Mock Page Title for {domain}</title>
<meta name="description" content="This is a mock webpage description for testing purposes. URL: {url}">
<meta name="author" content="Mock Generator">
<meta name="keywords" content="mock, test, webpage">
</head>
<body>
<main>
<h1>Mock Content for {domain}</h1>
<p>This is a mock webpage content generated for testing purposes.</p>
<h2>Section 1</h2>
<p>Lorem ipsum dolor sit amet, consectetur adipiscing elit.</p>
<h2>Section 2</h2>
<p>Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris.</p>
</main>
</body>
</html>
"""


class FixtureFetchClient:
    """Serve canned markup instead of touching the network.

    Lookups go: exact URL in ``pages``, then ``default_html``, then a
    generated mock page when ``generate_mock`` is set. Anything else is a
    404. ``calls`` records every URL that passed validation.
    """

    def __init__(
        self,
        pages: Mapping[str, str | int] | None = None,
        *,
        default_html: str | None = None,
        generate_mock: bool = False,
    ):
        self.pages = dict(pages or {})
        self.default_html = default_html
        self.generate_mock = generate_mock
        self.calls: list[str] = []

    async def fetch(self, url: str) -> RawPage:
        ensure_valid_url(url)
        self.calls.append(url)

        fixture = self.pages.get(url)
        # An int fixture simulates an HTTP error status for that URL.
        if isinstance(fixture, int):
            raise FetchError(url, status_code=fixture)
        if fixture is None:
            fixture = self.default_html
        if fixture is None and self.generate_mock:
            fixture = mock_page_html(url)
        if fixture is None:
            raise FetchError(url, status_code=404)

        return RawPage(url=url, status_code=200, text=fixture, final_url=url)
