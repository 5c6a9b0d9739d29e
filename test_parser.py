#!/usr/bin/env python3
"""
End-to-end tests for the trek pipeline.

Covers the generic path (clutter removal, standardization, image fallback,
low-content retry), the site-specific branch, output formats and the file
and dict entry points.
"""

import pytest
from lxml import etree

from trek import (
    ExtractedContent,
    ExtractorError,
    ExtractorRegistry,
    ParseError,
    Trek,
    TrekOptions,
    parse_html,
    parse_html_file,
)
from trek.clutter import remove_clutter
from trek.collector import MetadataCollector
from trek.extractors import BaseExtractor
from trek.schemas import MiniAppActionType
from trek.standardize import standardize_content
from trek.utils import count_words, extract_body_content


def long_paragraphs(words: int = 250) -> str:
    """Enough article text to stay above the retry threshold."""
    chunks = [" ".join(f"word{i + j}" for j in range(25)) for i in range(0, words, 25)]
    return "\n".join(f"<p>{chunk}</p>" for chunk in chunks)


@pytest.fixture
def trek():
    return Trek()


BASIC_PAGE = """
<html>
<head>
    <title>Test Article</title>
    <meta name="description" content="A test article">
    <meta name="author" content="Test Author">
</head>
<body>
    <nav>Navigation</nav>
    <article>
        <h1>Test Article</h1>
        <p>This is the first paragraph.</p>
        <p>This is the second paragraph with more content.</p>
    </article>
    <footer>Footer content</footer>
</body>
</html>
"""


def test_basic_extraction(trek):
    result = trek.parse(BASIC_PAGE)

    assert result.metadata.title == "Test Article"
    assert result.metadata.author == "Test Author"
    assert result.metadata.description == "A test article"
    assert "first paragraph" in result.content
    assert "second paragraph" in result.content
    assert result.metadata.word_count == count_words(result.content)
    assert result.extractor_type is None
    assert [tag.name for tag in result.meta_tags] == ["description", "author"]


def test_clutter_is_removed_from_long_articles(trek):
    html = f"""
    <html><head><title>Long Read</title></head>
    <body>
        <nav>Navigation</nav>
        <div class="social-share">Share buttons</div>
        <article>
            <h1>Long Read</h1>
            {long_paragraphs()}
        </article>
        <footer>Footer content</footer>
    </body></html>
    """
    result = trek.parse(html)

    assert result.metadata.word_count >= 200
    assert "word249" in result.content
    assert "Navigation" not in result.content
    assert "Share buttons" not in result.content
    assert "Footer content" not in result.content
    assert "<div" not in result.content


def test_metadata_extraction(trek):
    html = """
    <html>
    <head>
        <title>Meta Test</title>
        <meta property="og:title" content="Open Graph Title">
        <meta property="og:description" content="OG Description">
        <meta property="og:image" content="https://example.com/image.jpg">
        <meta name="author" content="Meta Author">
        <script type="application/ld+json">
        {
            "@context": "https://schema.org",
            "@type": "Article",
            "headline": "Schema Title",
            "author": {"@type": "Person", "name": "Schema Author"},
            "datePublished": "2024-01-01"
        }
        </script>
    </head>
    <body><article><p>Content</p></article></body>
    </html>
    """
    result = trek.parse(html)

    assert result.metadata.title == "Schema Title"
    assert result.metadata.author == "Schema Author"
    assert result.metadata.published == "2024-01-01"
    assert result.metadata.image == "https://example.com/image.jpg"
    assert result.metadata.schema_org_data[0]["@type"] == "Article"


def test_domain_from_url():
    result = Trek(TrekOptions(url="https://www.example.com/post/1")).parse(BASIC_PAGE)
    assert result.metadata.domain == "example.com"


def test_code_block_preservation(trek):
    html = """
    <html><body>
        <article>
            <h1>Code Example</h1>
            <p>Here's some code:</p>
            <pre><code class="language-rust">
fn main() {
    println!("Hello, world!");
}
            </code></pre>
        </article>
    </body></html>
    """
    result = trek.parse(html)

    assert 'println!' in result.content
    assert "<pre>" in result.content
    assert "<code" in result.content


def test_content_is_already_standardized(trek):
    html = """
    <html><head><title>My Title</title></head>
    <body><article>
        <p>Body text of the article.</p>
        <h2>My Title</h2>
        <div class='x'></div>
    </article></body></html>
    """
    result = trek.parse(html)

    assert "Body text" in result.content
    assert "My Title" not in result.content
    assert standardize_content(result.content, result.metadata.title) == result.content


# --- retry ---

SHORT_PAGE = """
<html><body>
    <div class="ad-container">Advertisement</div>
    <article class="main-content">
        <p>Short content</p>
    </article>
    <div class="social-share">Share buttons</div>
</body></html>
"""


def test_retry_on_little_content(trek):
    result = trek.parse(SHORT_PAGE)
    assert "Short content" in result.content


@pytest.mark.parametrize("html", [SHORT_PAGE, BASIC_PAGE])
def test_retry_never_returns_fewer_words(trek, html):
    strict = standardize_content(remove_clutter(extract_body_content(html)), "")
    result = trek.parse(html)
    assert result.metadata.word_count >= count_words(strict)


def test_retry_keeps_more_content(trek):
    """Removal leaves under 200 words, so the unfiltered attempt wins."""
    result = trek.parse(BASIC_PAGE)
    assert "Navigation" in result.content


def test_retry_reuses_collected_metadata(trek, monkeypatch):
    calls = []
    original_collect = MetadataCollector.collect

    def counting_collect(self, html):
        calls.append(html)
        return original_collect(self, html)

    monkeypatch.setattr(MetadataCollector, "collect", counting_collect)
    result = trek.parse(SHORT_PAGE)

    # The ad only survives in the unfiltered second attempt
    assert "Advertisement" in result.content
    assert len(calls) == 1


def test_no_retry_when_removal_disabled():
    options = TrekOptions(remove_exact_selectors=False, remove_partial_selectors=False)
    result = Trek(options).parse(SHORT_PAGE)
    assert "Advertisement" in result.content


# --- image fallback ---

def test_fallback_image_extraction(trek):
    html = """
    <!DOCTYPE html>
    <html>
    <head><title>Test Article</title></head>
    <body>
        <article>
            <h1>Article Title</h1>
            <img src="/tracking.gif" width="1" height="1" alt="">
            <p>Some text here</p>
            <img src="https://example.com/main-image.jpg" width="800" height="600" alt="Main">
            <p>More content</p>
            <img src="https://example.com/another-image.jpg" alt="Another image">
        </article>
    </body>
    </html>
    """
    assert trek.parse(html).metadata.image == "https://example.com/main-image.jpg"


def test_no_fallback_when_og_image_exists(trek):
    html = """
    <html>
    <head><meta property="og:image" content="https://example.com/og-image.jpg"></head>
    <body><article>
        <img src="https://example.com/content-image.jpg" width="800" height="600" alt="Content">
    </article></body>
    </html>
    """
    assert trek.parse(html).metadata.image == "https://example.com/og-image.jpg"


def test_no_suitable_images(trek):
    html = """
    <html><body><article>
        <img src="/tracking.gif" width="1" height="1" alt="">
        <img src="/icon.png" width="16" height="16" alt="Icon">
        <img src="data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAAAIBRAA7" alt="">
        <p>Content without suitable images</p>
    </article></body></html>
    """
    assert trek.parse(html).metadata.image == ""


def test_unparseable_dimensions_use_default(trek):
    html = '<html><body><p>Text</p><img src="/photo.jpg" width="auto" height="100%"></body></html>'
    assert trek.parse(html).metadata.image == "/photo.jpg"


# --- site-specific branch ---

CROWDFUND_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Support Christopher's Project</title>
    <meta name="fc:frame" content='{"version":"next","imageUrl":"https://cdn.example.com/crowdfund/card.png","button":{"title":"Donate now","action":{"type":"launch_frame","url":"https://crowdfund.seedclub.com/c/abc","splashImageUrl":"https://cdn.example.com/crowdfund/icon.png","splashBackgroundColor":"#ffffff","name":"Crowdfund"}}}'>
    <meta property="og:title" content="Support Christopher's Project">
    <meta property="og:description" content="Help fund this amazing project">
    <meta property="og:image" content="https://cdn.example.com/crowdfund/card.png">
</head>
<body>
    <h1>Support Christopher's Project</h1>
    <p>This is a crowdfunding campaign for an amazing project.</p>
</body>
</html>
"""


def test_farcaster_mini_app():
    result = Trek(TrekOptions(url="https://crowdfund.seedclub.com/c/abc")).parse(CROWDFUND_PAGE)

    assert result.extractor_type == "farcaster"
    assert result.metadata.title == "Support Christopher's Project"
    assert result.metadata.description == "Help fund this amazing project"
    assert result.metadata.image == "https://cdn.example.com/crowdfund/card.png"
    assert result.content.startswith("<div><h1>")
    assert result.metadata.word_count == count_words(result.content)

    embed = result.metadata.mini_app_embed
    assert embed is not None
    assert embed.version == "next"
    assert embed.button.title == "Donate now"
    assert embed.button.action.action_type == MiniAppActionType.LAUNCH_FRAME
    assert embed.button.action.url == "https://crowdfund.seedclub.com/c/abc"
    assert embed.button.action.name == "Crowdfund"
    assert embed.button.action.splash_background_color == "#ffffff"


def test_page_without_embed(trek):
    result = trek.parse(BASIC_PAGE)
    assert result.metadata.mini_app_embed is None


def test_malformed_embed_does_not_fail_parse(trek):
    html = """<html><head><meta name="fc:frame" content='{"version": '></head>
    <body><p>Text</p></body></html>"""
    result = trek.parse(html)
    assert result.metadata.mini_app_embed is None
    assert "Text" in result.content


class OverridingExtractor(BaseExtractor):
    def can_extract(self, url, schema_org_data):
        return True

    def extract(self, html):
        return ExtractedContent(author="Override Author", content_html="<p>one two three</p>")

    def name(self):
        return "overriding"


class BrokenExtractor(OverridingExtractor):
    def extract(self, html):
        raise RuntimeError("selector not found")

    def name(self):
        return "broken"


def registry_with(extractor):
    registry = ExtractorRegistry()
    registry.register(extractor)
    return registry


def test_extractor_overrides_only_present_fields():
    result = Trek(registry=registry_with(OverridingExtractor())).parse(BASIC_PAGE)

    assert result.extractor_type == "overriding"
    assert result.metadata.author == "Override Author"
    assert result.metadata.title == "Test Article"
    assert result.content == "<p>one two three</p>"
    assert result.metadata.word_count == 3


def test_extractor_failure_is_fatal():
    with pytest.raises(ExtractorError) as exc_info:
        Trek(registry=registry_with(BrokenExtractor())).parse(BASIC_PAGE)
    assert exc_info.value.extractor == "broken"
    assert exc_info.value.to_response()["error"] == "ExtractorError"


# --- output formats and entry points ---

def test_separate_markdown():
    result = Trek(TrekOptions(separate_markdown=True)).parse(BASIC_PAGE)
    assert "<p>" in result.content
    assert "first paragraph" in result.content_markdown
    assert "<p>" not in result.content_markdown


def test_markdown_replaces_content():
    result = Trek(TrekOptions(markdown=True)).parse(BASIC_PAGE)
    assert result.content_markdown is None
    assert "<p>" not in result.content
    assert "# Test Article" in result.content


def test_debug_keeps_wrappers():
    html = "<html><body><div><div><p style='color: red'>Styled</p></div></div></body></html>"
    result = Trek(TrekOptions(debug=True)).parse(html)
    assert "<div>" in result.content
    assert "style=" in result.content


def test_to_dict_flattens_metadata():
    data = parse_html(BASIC_PAGE, url="https://example.com").to_dict()
    for key in ["content", "contentMarkdown", "extractorType", "metaTags",
                "title", "wordCount", "parseTime", "schemaOrgData", "miniAppEmbed"]:
        assert key in data
    assert data["domain"] == "example.com"
    assert data["metaTags"][0] == {"name": "description", "property": None, "content": "A test article"}


def test_from_dict_accepts_wire_names():
    trek = Trek.from_dict({"url": "https://www.example.org", "removeExactSelectors": False,
                           "separateMarkdown": True})
    assert trek.options.remove_exact_selectors is False
    assert trek.options.remove_partial_selectors is True
    assert trek.options.separate_markdown is True


def test_parse_file_uses_declared_charset(tmp_path):
    page = tmp_path / "latin.html"
    page.write_bytes(
        '<html><head><meta charset="iso-8859-1"><title>Café crème</title></head>'
        '<body><p>Déjà vu</p></body></html>'.encode("latin-1")
    )
    result = parse_html_file(page)
    assert result.metadata.title == "Café crème"
    assert "Déjà vu" in result.content


class RejectingParser:
    """Stands in for lxml's HTMLParser and fails on the first chunk."""

    def __init__(self, target=None):
        self.target = target

    def feed(self, data):
        raise etree.LxmlError("tokenizer gave up")

    def close(self):
        return self.target.close()


def test_tokenizer_failure_is_fatal(trek, monkeypatch):
    monkeypatch.setattr(etree, "HTMLParser", RejectingParser)
    with pytest.raises(ParseError) as exc_info:
        trek.parse(BASIC_PAGE)
    assert isinstance(exc_info.value.__cause__, etree.LxmlError)
    assert exc_info.value.details == {"length": len(BASIC_PAGE)}


def test_empty_document(trek):
    result = trek.parse("")
    assert result.content == ""
    assert result.metadata.word_count == 0
    assert result.meta_tags == []
