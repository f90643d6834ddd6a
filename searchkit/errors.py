"""Error taxonomy shared by the search and webpage tools.

Every error carries a ``message`` that is safe to show to a user: a Japanese
line followed by an English line, naming the failure and, where known, its
cause. No tracebacks or internal identifiers end up in these messages.
"""

from __future__ import annotations

from typing import Literal

ExtractionKind = Literal["invalid_url", "http", "fetch", "extraction"]


def bilingual(ja: str, en: str) -> str:
    """Join a Japanese and an English message into one user-facing text."""
    return f"{ja}\n{en}"


class WebToolError(Exception):
    """Base class for all recoverable tool errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidUrlError(WebToolError):
    """URL is not an absolute http(s) URL with a host."""

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(
            bilingual(
                f"URLの形式が無効です: {url}{detail}\n"
                "URLはhttp://またはhttps://で始まる必要があります。",
                f"Invalid URL format: {url}{detail}\n"
                "URL must start with http:// or https:// and be properly formatted.",
            )
        )


class FetchError(WebToolError):
    """Retrieving a page failed.

    ``status_code`` is set for non-2xx responses and ``None`` for
    transport-level failures (DNS, refused connection, timeout).
    """

    def __init__(
        self,
        url: str,
        *,
        status_code: int | None = None,
        cause: str | None = None,
    ):
        self.url = url
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            message = bilingual(
                f"ウェブページの取得に失敗しました (HTTP {status_code}): {url}",
                f"Failed to fetch webpage (HTTP {status_code}): {url}",
            )
        else:
            detail = f" ({cause})" if cause else ""
            message = bilingual(
                f"ウェブページの取得に失敗しました: {url}{detail}",
                f"Failed to fetch webpage: {url}{detail}",
            )
        super().__init__(message)


class ExtractionError(WebToolError):
    """Single-page extraction failed; ``kind`` tells the caller why."""

    def __init__(
        self,
        url: str,
        kind: ExtractionKind,
        message: str,
        *,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def wrap(cls, url: str, error: BaseException) -> "ExtractionError":
        """Normalize any failure for ``url`` into an ExtractionError."""
        if isinstance(error, ExtractionError):
            return error
        if isinstance(error, InvalidUrlError):
            return cls(url, "invalid_url", error.message)
        if isinstance(error, FetchError):
            kind: ExtractionKind = "http" if error.status_code is not None else "fetch"
            return cls(url, kind, error.message, status_code=error.status_code)
        detail = str(error) or type(error).__name__
        return cls(
            url,
            "extraction",
            bilingual(
                f"コンテンツ抽出エラー: {detail}",
                f"Content extraction error: {detail}",
            ),
        )


class LimitExceededError(WebToolError):
    """Too many URLs in one batch request."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(
            bilingual(
                f"パフォーマンスを維持するため、1リクエストあたり最大{limit}つのURLまでに"
                "制限されています。URLの数を減らしてください。",
                f"Maximum {limit} URLs allowed per request to maintain performance. "
                "Please reduce the number of URLs.",
            )
        )


class SearchQueryError(WebToolError):
    """Search query failed validation; raised before any network call."""


class EmptyQueryError(SearchQueryError):
    def __init__(self) -> None:
        super().__init__(
            bilingual(
                "検索クエリが空です。具体的なキーワードを入力してください。",
                "Search query cannot be empty. Please provide specific keywords.",
            )
        )


class InvalidResultCountError(SearchQueryError):
    def __init__(self, count: object):
        self.count = count
        super().__init__(
            bilingual(
                "検索結果数は1から10の間で指定してください。",
                "Number of results must be between 1 and 10.",
            )
        )


class InvalidSafeSearchError(SearchQueryError):
    def __init__(self, level: str):
        self.level = level
        super().__init__(
            bilingual(
                f"セーフサーチの設定が無効です: {level}（off / medium / high）",
                f"Invalid safe search level: {level} (expected off, medium or high).",
            )
        )


class NoResultsError(WebToolError):
    """Upstream answered without a usable result list."""

    def __init__(self) -> None:
        super().__init__(
            bilingual(
                "検索結果が見つかりませんでした。検索条件を変更するか、APIキーの設定を確認してください。",
                "No search results found. Please modify your search criteria "
                "or check your API key settings.",
            )
        )


class SearchError(WebToolError):
    """Upstream search call failed.

    ``message`` is the upstream (or transport) message as-is; ``details``
    holds the itemized ``(reason, message)`` pairs in upstream order.
    """

    def __init__(
        self,
        message: str,
        *,
        code: int | str | None = None,
        details: list[tuple[str, str]] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.details = list(details or [])


def render_error(error: BaseException, ja_context: str, en_context: str) -> str:
    """Render an error as bilingual text for a tool response."""
    if isinstance(error, SearchError):
        code = f" ({error.code})" if error.code is not None else ""
        text = bilingual(
            f"{ja_context}に失敗しました{code}: {error.message}",
            f"{en_context} failed{code}: {error.message}",
        )
        if error.details:
            lines = "\n".join(f"- {reason}: {message}" for reason, message in error.details)
            text += f"\n\n詳細 / Details:\n{lines}"
        return text

    if isinstance(error, WebToolError):
        return error.message

    detail = str(error) or type(error).__name__
    return bilingual(
        f"{ja_context}に失敗しました: {detail}",
        f"{en_context} failed: {detail}",
    )
