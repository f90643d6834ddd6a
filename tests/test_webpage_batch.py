import asyncio

import pytest

from searchkit.errors import LimitExceededError
from searchkit.tools.webpage.batch import batch_extract, successful_urls
from searchkit.tools.webpage.fetch import FixtureFetchClient
from searchkit.tools.webpage.models import ExtractionFailure, PageContent, RawPage, batch_to_dict


@pytest.mark.asyncio
async def test_batch_keys_match_input_with_mixed_outcomes() -> None:
    fetcher = FixtureFetchClient(
        {
            "https://ok.example": "<h1>OK</h1>",
            "https://missing.example": 404,
        }
    )
    urls = ["https://ok.example", "https://missing.example", "not-a-url"]

    results = await batch_extract(urls, fetcher)

    assert set(results) == set(urls)
    assert isinstance(results["https://ok.example"], PageContent)
    assert results["https://ok.example"].markdown_content == "# OK\n\n"

    missing = results["https://missing.example"]
    assert isinstance(missing, ExtractionFailure)
    assert "HTTP 404" in missing.error

    invalid = results["not-a-url"]
    assert isinstance(invalid, ExtractionFailure)
    assert "Invalid URL format" in invalid.error

    assert successful_urls(results) == ["https://ok.example"]
    assert fetcher.calls == ["https://ok.example", "https://missing.example"]


@pytest.mark.asyncio
async def test_batch_over_limit_fails_before_fetching() -> None:
    fetcher = FixtureFetchClient(generate_mock=True)
    urls = [f"https://site{i}.example" for i in range(6)]

    with pytest.raises(LimitExceededError) as exc_info:
        await batch_extract(urls, fetcher)

    assert exc_info.value.limit == 5
    assert "Maximum 5 URLs" in exc_info.value.message
    assert fetcher.calls == []


@pytest.mark.asyncio
async def test_batch_at_limit_succeeds() -> None:
    urls = [f"https://site{i}.example" for i in range(5)]
    results = await batch_extract(urls, FixtureFetchClient(generate_mock=True))
    assert set(results) == set(urls)
    assert all(isinstance(item, PageContent) for item in results.values())


@pytest.mark.asyncio
async def test_batch_runs_fetches_concurrently() -> None:
    first_started = asyncio.Event()

    class HandshakeFetcher:
        async def fetch(self, url: str) -> RawPage:
            if url == "https://b.example":
                # Only completes if a.example is already in flight.
                await first_started.wait()
            else:
                first_started.set()
                await asyncio.sleep(0.01)
            return RawPage(url=url, status_code=200, text=f"<p>{url}</p>")

    results = await asyncio.wait_for(
        batch_extract(["https://b.example", "https://a.example"], HandshakeFetcher()),
        timeout=2,
    )

    assert results["https://a.example"].markdown_content == "https://a.example\n\n"
    assert results["https://b.example"].markdown_content == "https://b.example\n\n"


@pytest.mark.asyncio
async def test_batch_isolates_unexpected_failures() -> None:
    class FlakyFetcher:
        async def fetch(self, url: str) -> RawPage:
            if "bad" in url:
                raise RuntimeError("boom")
            await asyncio.sleep(0.01)
            return RawPage(url=url, status_code=200, text="<p>fine</p>")

    results = await batch_extract(["https://bad.example", "https://good.example"], FlakyFetcher())

    assert results["https://good.example"].markdown_content == "fine\n\n"
    failure = results["https://bad.example"]
    assert isinstance(failure, ExtractionFailure)
    assert "boom" in failure.error


@pytest.mark.asyncio
async def test_batch_collapses_duplicate_urls() -> None:
    fetcher = FixtureFetchClient(generate_mock=True)
    results = await batch_extract(["https://dup.example", "https://dup.example"], fetcher)

    assert list(results) == ["https://dup.example"]
    assert fetcher.calls == ["https://dup.example"]


@pytest.mark.asyncio
async def test_batch_to_dict_failure_holds_only_message() -> None:
    results = await batch_extract(["https://x.example"], FixtureFetchClient())
    payload = batch_to_dict(results)
    assert list(payload["https://x.example"]) == ["error"]
