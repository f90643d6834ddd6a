"""URL checks applied before any page is fetched."""

from __future__ import annotations

from urllib.parse import urlparse

from searchkit.errors import InvalidUrlError

_ALLOWED_SCHEMES = {"http", "https"}


def validate_url(url: str) -> tuple[bool, str]:
    """Validate an absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        return False, "URL must not be empty"

    try:
        parsed = urlparse(url.strip())
        host = parsed.hostname
        # Accessing .port raises for out-of-range or non-numeric ports.
        parsed.port
    except ValueError as e:
        return False, str(e)

    scheme = (parsed.scheme or "").lower()
    if scheme not in _ALLOWED_SCHEMES:
        return False, f"Only http/https URLs are allowed, got '{scheme or 'none'}'"

    if not host:
        return False, "URL host is required"

    return True, ""


def ensure_valid_url(url: str) -> str:
    """Return ``url`` unchanged or raise InvalidUrlError."""
    ok, reason = validate_url(url)
    if not ok:
        raise InvalidUrlError(url, reason)
    return url


def find_invalid_urls(urls: list[str]) -> list[str]:
    """Return the URLs that fail validation, in input order."""
    return [url for url in urls if not validate_url(url)[0]]
