"""Tests for page metadata extraction and timestamp parsing."""

from __future__ import annotations

from datetime import datetime, timezone

from bs4 import BeautifulSoup

from sift_extract.fetch.metadata import extract_metadata, parse_timestamp

from conftest import NEWS_PAGE

NEWS_URL = "https://news.example.com/2024/03/rivers?ref=home"


def _metadata(html: str, url: str = NEWS_URL):
    return extract_metadata(BeautifulSoup(html, "html.parser"), url)


def test_meta_tags_are_read():
    meta = _metadata(NEWS_PAGE)

    assert meta.title == "Rivers return to the valley"
    assert meta.byline == "Jane Doe"
    assert meta.excerpt == "After a decade of drought the valley rivers are flowing again."
    assert meta.site_name == "The Daily Example"
    assert meta.image == "https://news.example.com/media/river.jpg"
    assert meta.language == "en-GB"
    assert meta.published_time == "2024-03-01T10:00:00Z"
    assert meta.modified_time == "2024-03-02T08:30:00+00:00"


def test_largest_icon_wins():
    assert _metadata(NEWS_PAGE).favicon == "https://news.example.com/favicon-192.png"


def test_json_ld_takes_priority_over_meta_tags():
    html = """
    <html><head>
    <meta property="og:title" content="OG title" />
    <meta name="author" content="Meta Author" />
    <script type="application/ld+json">
    {"@context": "https://schema.org", "@graph": [
        {"@type": "WebSite", "name": "Not an article"},
        {"@type": "NewsArticle",
         "headline": "LD headline",
         "author": [{"@type": "Person", "name": "Ada Lovelace"}, {"name": "Charles Babbage"}],
         "publisher": {"@type": "Organization", "name": "Engine Weekly"},
         "image": {"@type": "ImageObject", "url": "/images/engine.png"},
         "datePublished": "2024-03-01T10:00:00Z",
         "dateModified": "2024-03-02T08:30:00Z"}
    ]}
    </script>
    </head><body><p>Body</p></body></html>
    """
    meta = _metadata(html)

    assert meta.title == "LD headline"
    assert meta.byline == "Ada Lovelace, Charles Babbage"
    assert meta.site_name == "Engine Weekly"
    assert meta.image == "https://news.example.com/images/engine.png"
    assert meta.published_time == "2024-03-01T10:00:00Z"
    assert meta.modified_time == "2024-03-02T08:30:00Z"


def test_broken_json_ld_is_ignored():
    html = """
    <html><head>
    <script type="application/ld+json">{"@type": "Article", "headline": </script>
    <meta property="og:title" content="Fallback title" />
    </head><body></body></html>
    """
    assert _metadata(html).title == "Fallback title"


def test_in_page_byline_when_no_meta_author():
    html = """
    <html><body>
    <article>
      <p class="byline">By <a rel="author" href="/people/sam">Sam Writer</a></p>
      <p>Some text.</p>
    </article>
    </body></html>
    """
    assert _metadata(html).byline == "Sam Writer"


def test_author_url_is_not_used_as_byline():
    html = """
    <html><head>
    <meta property="article:author" content="https://facebook.com/someone" />
    </head><body><p>No byline here.</p></body></html>
    """
    assert _metadata(html).byline == ""


def test_unattributed_page_has_empty_fields():
    meta = _metadata("<html><head><title>Plain</title></head><body><p>Text</p></body></html>")

    assert meta.byline == ""
    assert meta.site_name == ""
    assert meta.image == ""
    assert meta.favicon == ""
    assert meta.language == ""
    assert meta.published_time == ""


def test_dublin_core_dotted_names_are_recognized():
    html = """
    <html><head>
    <meta name="DC.title" content="Dublin Core Title" />
    <meta name="DC.creator" content="Dee Author" />
    </head><body></body></html>
    """
    meta = _metadata(html)

    assert meta.title == "Dublin Core Title"
    assert meta.byline == "Dee Author"


def test_parse_timestamp_iso_with_zone():
    assert parse_timestamp("2024-03-01T10:00:00Z") == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)


def test_parse_timestamp_naive_is_utc():
    parsed = parse_timestamp("2024-03-01 10:00:00")
    assert parsed is not None
    assert parsed.tzinfo is not None
    assert int(parsed.timestamp()) == 1709287200


def test_parse_timestamp_rfc_2822():
    parsed = parse_timestamp("Fri, 01 Mar 2024 10:00:00 GMT")
    assert parsed is not None
    assert int(parsed.timestamp()) == 1709287200


def test_parse_timestamp_rejects_garbage():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp("not a date") is None
