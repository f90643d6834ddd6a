"""Turn raw page markup into a PageContent.

The parsed tree is never modified. Noise elements (scripts, navigation,
ad containers, ...) are recorded up front and every later step skips them
and anything nested inside them, so the same soup can still be inspected
as-is after extraction.
"""

from __future__ import annotations

from collections.abc import Iterator

from bs4 import BeautifulSoup, CData, NavigableString, Tag

from searchkit.errors import ExtractionError
from searchkit.tools.webpage.models import PageContent, PageStats
from searchkit.tools.webpage.safety import ensure_valid_url

PREVIEW_CHARS = 500
DEFAULT_TITLE = "No Title"
# lxml closes <p> and <li> implicitly, as browsers do.
PARSER = "lxml"

NOISE_SELECTOR = (
    "script, style, nav, footer, header, aside, iframe, "
    ".ads, .advertisement, .banner, #banner, #ads"
)

# Tried in order; the first visible element of the first matching tier wins.
REGION_SELECTORS = (
    "main",
    "article",
    'div[role="main"]',
    "div.content, div.main, div#content, div#main",
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
LIST_TAGS = ("ul", "ol")
BLOCK_TAGS = [*HEADING_TAGS, "p", *LIST_TAGS, "blockquote"]

_TEXT_TYPES = (NavigableString, CData)


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


class NoiseFilter:
    """Answers whether an element sits inside a noise subtree."""

    def __init__(self, soup: BeautifulSoup, selector: str = NOISE_SELECTOR):
        self._noise = {id(el) for el in soup.select(selector)}

    def hides(self, element: Tag) -> bool:
        node: Tag | None = element
        while node is not None:
            if id(node) in self._noise:
                return True
            node = node.parent
        return False

    def visible_strings(self, element: Tag) -> Iterator[str]:
        """Yield text nodes under ``element`` in document order, skipping noise."""
        stack = list(reversed(element.contents))
        while stack:
            node = stack.pop()
            if isinstance(node, Tag):
                if id(node) not in self._noise:
                    stack.extend(reversed(node.contents))
            elif type(node) in _TEXT_TYPES:
                yield str(node)

    def text(self, element: Tag) -> str:
        return collapse_whitespace("".join(self.visible_strings(element)))


def extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    title = tag.get_text().strip() if tag else ""
    return title or DEFAULT_TITLE


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if not tag:
        return ""
    content = tag.get("content")
    return content if isinstance(content, str) else ""


def extract_description(soup: BeautifulSoup) -> str:
    return (
        _meta_content(soup, name="description")
        or _meta_content(soup, property="og:description")
        or ""
    )


def extract_meta_tags(soup: BeautifulSoup) -> dict[str, str]:
    """Collect meta tags by name (or property); later duplicates overwrite."""
    tags: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        key = meta.get("name") or meta.get("property")
        content = meta.get("content")
        if isinstance(key, str) and key and isinstance(content, str) and content:
            tags[key] = content
    return tags


def select_main_region(soup: BeautifulSoup, noise: NoiseFilter) -> Tag:
    """Pick the primary content region, falling back to the body."""
    for selector in REGION_SELECTORS:
        for candidate in soup.select(selector):
            if not noise.hides(candidate):
                return candidate
    return soup.body or soup


def render_markdown(region: Tag, noise: NoiseFilter) -> str:
    """Flatten headings, paragraphs, lists and quotes under ``region``."""
    parts: list[str] = []
    for block in region.find_all(BLOCK_TAGS):
        if noise.hides(block):
            continue

        text = noise.text(block)
        if not text:
            continue

        name = block.name.lower()
        if name in HEADING_TAGS:
            parts.append(f"{'#' * int(name[1])} {text}\n\n")
        elif name == "p":
            parts.append(f"{text}\n\n")
        elif name in LIST_TAGS:
            for item in block.find_all("li"):
                if noise.hides(item):
                    continue
                item_text = noise.text(item)
                if item_text:
                    parts.append(f"- {item_text}\n")
            parts.append("\n")
        elif name == "blockquote":
            parts.append(f"> {text}\n\n")
    return "".join(parts)


def build_stats(markdown: str) -> PageStats:
    """Count whitespace-separated tokens of the body, ``#``/``-``/``>`` markers included."""
    return PageStats(word_count=len(markdown.split()), approximate_chars=len(markdown))


def extract_content(
    markup: str,
    url: str,
    *,
    preview_chars: int = PREVIEW_CHARS,
) -> PageContent:
    """
    Extract normalized content from page markup.

    Args:
        markup: Raw HTML as retrieved.
        url: Page URL; validated before any parsing happens.
        preview_chars: Length of the preview prefix.

    Returns:
        The extracted page content.

    Raises:
        InvalidUrlError: ``url`` is not an absolute http(s) URL.
        ExtractionError: Parsing or processing failed.
    """
    ensure_valid_url(url)

    try:
        soup = BeautifulSoup(markup, PARSER)
        title = extract_title(soup)
        description = extract_description(soup)
        meta_tags = extract_meta_tags(soup)

        noise = NoiseFilter(soup)
        region = select_main_region(soup, noise)
        markdown = render_markdown(region, noise)
    except Exception as e:
        raise ExtractionError.wrap(url, e) from e

    return PageContent(
        url=url,
        title=title,
        description=description,
        markdown_content=markdown,
        meta_tags=meta_tags,
        stats=build_stats(markdown),
        preview=markdown[:preview_chars],
    )
