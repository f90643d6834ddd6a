"""Webpage extraction models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias


@dataclass(slots=True, frozen=True)
class RawPage:
    """Markup returned by a fetch client."""

    url: str
    status_code: int
    text: str
    final_url: str = ""


@dataclass(slots=True, frozen=True)
class PageStats:
    word_count: int
    approximate_chars: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "word_count": self.word_count,
            "approximate_chars": self.approximate_chars,
        }


@dataclass(slots=True, frozen=True)
class PageContent:
    """Normalized content of one fetched page."""

    url: str
    title: str
    description: str
    markdown_content: str
    stats: PageStats
    preview: str
    meta_tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only view over a private copy.
        object.__setattr__(self, "meta_tags", MappingProxyType(dict(self.meta_tags)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "markdown_content": self.markdown_content,
            "meta_tags": dict(self.meta_tags),
            "stats": self.stats.to_dict(),
            "content_preview": {"first_500_chars": self.preview},
        }


@dataclass(slots=True, frozen=True)
class ExtractionFailure:
    """Batch slot for a URL whose extraction failed."""

    url: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error}


BatchResult: TypeAlias = dict[str, PageContent | ExtractionFailure]


def batch_to_dict(results: BatchResult) -> dict[str, dict[str, Any]]:
    """Serialize a batch result for a tool response."""
    return {url: item.to_dict() for url, item in results.items()}
