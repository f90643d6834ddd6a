import pytest
from bs4 import BeautifulSoup

from searchkit.errors import ExtractionError, InvalidUrlError
from searchkit.tools.webpage.extractor import (
    PARSER,
    NoiseFilter,
    extract_content,
    render_markdown,
    select_main_region,
)

PAGE = """<html>
<head>
<title> Example Page </title>
<meta name="description" content="Plain description">
<meta property="og:description" content="OG description">
<script>var tracking = 1;</script>
</head>
<body>
<header><h1>Site Header</h1></header>
<nav><ul><li>Home</li><li>About</li></ul></nav>
<main>
<h2>Main Title</h2>
<p>Real   content
here.</p>
<aside><p>Sidebar</p></aside>
<div class="ads"><p>Buy now</p></div>
<script>document.write("x")</script>
</main>
<footer><p>Footer text</p></footer>
</body>
</html>
"""


def test_extract_minimal_document_without_main_region() -> None:
    content = extract_content("<h1>A</h1><p>B C</p>", "https://example.com")

    assert content.markdown_content == "# A\n\nB C\n\n"
    assert content.stats.word_count == 4
    assert content.stats.approximate_chars == len("# A\n\nB C\n\n")
    assert content.title == "No Title"
    assert content.description == ""
    assert content.meta_tags == {}


def test_extract_rejects_invalid_url_before_parsing() -> None:
    with pytest.raises(InvalidUrlError):
        extract_content("<p>never parsed</p>", "invalid-url")


def test_extract_strips_noise_and_uses_main_region() -> None:
    content = extract_content(PAGE, "https://example.com/page")

    assert content.title == "Example Page"
    assert content.description == "Plain description"
    assert content.markdown_content == "## Main Title\n\nReal content here.\n\n"
    assert "Sidebar" not in content.markdown_content
    assert "Buy now" not in content.markdown_content
    assert "Site Header" not in content.markdown_content


def test_description_falls_back_to_og_description() -> None:
    html = '<head><meta property="og:description" content="From OG"></head><p>x</p>'
    content = extract_content(html, "https://example.com")
    assert content.description == "From OG"


def test_meta_tags_last_duplicate_wins() -> None:
    html = """<head>
    <meta name="author" content="First">
    <meta property="og:title" content="OG Title">
    <meta name="author" content="Second">
    <meta name="empty" content="">
    <meta charset="utf-8">
    </head>"""
    content = extract_content(html, "https://example.com")
    assert content.meta_tags == {"author": "Second", "og:title": "OG Title"}


def test_region_priority_article_before_content_div() -> None:
    html = """<body>
    <div class="content"><p>From div</p></div>
    <article><p>From article</p></article>
    </body>"""
    content = extract_content(html, "https://example.com")
    assert content.markdown_content == "From article\n\n"


def test_region_uses_only_first_match_of_tier() -> None:
    html = "<article><p>First</p></article><article><p>Second</p></article>"
    content = extract_content(html, "https://example.com")
    assert content.markdown_content == "First\n\n"


def test_region_role_main_and_id_main() -> None:
    role_main = '<div id="main"><p>Id</p></div><div role="main"><p>Role</p></div>'
    assert extract_content(role_main, "https://example.com").markdown_content == "Role\n\n"

    id_main = '<div><p>Outside</p></div><div id="main"><p>Inside</p></div>'
    assert extract_content(id_main, "https://example.com").markdown_content == "Inside\n\n"


def test_region_candidate_inside_noise_is_skipped() -> None:
    html = """<body>
    <aside><article><p>Promo article</p></article></aside>
    <div id="content"><p>Body text</p></div>
    </body>"""
    content = extract_content(html, "https://example.com")
    assert content.markdown_content == "Body text\n\n"


def test_lists_blockquotes_and_heading_levels() -> None:
    html = """<main>
    <h3>Third   level</h3>
    <ul><li>One</li><li>  Two
      words </li><li>   </li></ul>
    <ol><li>First</li></ol>
    <blockquote>  quoted
    text </blockquote>
    <p>   </p>
    </main>"""
    content = extract_content(html, "https://example.com")
    assert content.markdown_content == (
        "### Third level\n\n"
        "- One\n- Two words\n\n"
        "- First\n\n"
        "> quoted text\n\n"
    )


def test_unclosed_list_items_emit_one_line_each() -> None:
    content = extract_content("<ul><li>alpha<li>beta</ul>", "https://example.com")
    assert content.markdown_content == "- alpha\n- beta\n\n"
    assert content.stats.word_count == 4


def test_unclosed_paragraphs_are_siblings() -> None:
    content = extract_content("<p>one<p>two", "https://example.com")
    assert content.markdown_content == "one\n\ntwo\n\n"
    assert content.stats.word_count == 2


def test_word_count_includes_markdown_markers() -> None:
    content = extract_content(
        "<h2>Big news</h2><blockquote>so it goes</blockquote>", "https://example.com"
    )
    assert content.markdown_content == "## Big news\n\n> so it goes\n\n"
    assert content.stats.word_count == 7


def test_meta_tags_are_read_only() -> None:
    content = extract_content(
        '<head><meta name="author" content="Ann"></head><p>x</p>', "https://example.com"
    )

    with pytest.raises(TypeError):
        content.meta_tags["author"] = "Bob"

    payload = content.to_dict()
    payload["meta_tags"]["author"] = "Bob"
    assert content.meta_tags["author"] == "Ann"


def test_inline_noise_inside_paragraph_is_dropped() -> None:
    html = "<p>Hello <script>alert(1)</script>world <iframe>frame</iframe></p>"
    content = extract_content(html, "https://example.com")
    assert content.markdown_content == "Hello world\n\n"


def test_preview_is_prefix_and_counts_match_body() -> None:
    paragraphs = "".join(f"<p>word{i} " + "lorem ipsum " * 10 + "</p>" for i in range(20))
    content = extract_content(f"<main>{paragraphs}</main>", "https://example.com")

    body = content.markdown_content
    assert len(body) > 500
    assert content.preview == body[:500]
    assert content.stats.word_count == len(body.split())
    assert content.stats.approximate_chars == len(body)

    short = extract_content("<p>short</p>", "https://example.com")
    assert short.preview == short.markdown_content == "short\n\n"


def test_extraction_is_idempotent() -> None:
    first = extract_content(PAGE, "https://example.com/page")
    second = extract_content(PAGE, "https://example.com/page")

    assert first.title == second.title
    assert first.markdown_content == second.markdown_content
    assert first.stats == second.stats


def test_parsed_tree_is_not_mutated() -> None:
    soup = BeautifulSoup(PAGE, PARSER)
    noise = NoiseFilter(soup)

    region = select_main_region(soup, noise)
    markdown = render_markdown(region, noise)

    assert region.name == "main"
    assert markdown == "## Main Title\n\nReal content here.\n\n"
    assert soup.find("nav") is not None
    assert soup.find("aside") is not None
    assert len(soup.find_all("script")) == 2


def test_to_dict_wire_shape() -> None:
    content = extract_content("<title>T</title><p>Hi</p>", "https://example.com")
    assert content.to_dict() == {
        "url": "https://example.com",
        "title": "T",
        "description": "",
        "markdown_content": "Hi\n\n",
        "meta_tags": {},
        "stats": {"word_count": 1, "approximate_chars": 4},
        "content_preview": {"first_500_chars": "Hi\n\n"},
    }


def test_processing_failure_is_wrapped(monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr("searchkit.tools.webpage.extractor.select_main_region", boom)

    with pytest.raises(ExtractionError) as exc_info:
        extract_content("<p>x</p>", "https://example.com")

    assert exc_info.value.kind == "extraction"
    assert "Content extraction error: parser exploded" in exc_info.value.message
