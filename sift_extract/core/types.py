"""
Core data types for sift-extract.

This module defines the data structures passed between pipeline stages:
- FetchResult: Raw page returned by the fetcher
- ReadableDocument: Main content and metadata isolated by the extractor
- Article: The final, immutable record handed back to callers
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class FetchResult:
    """Result of a successful HTTP fetch.

    Attributes:
        url: The URL that was requested
        final_url: The URL the response came from after redirects
        status_code: HTTP status code of the final response
        content_type: Value of the Content-Type header ("" when missing)
        text: The decoded response body
    """
    url: str
    final_url: str
    status_code: int
    content_type: str
    text: str


@dataclass
class ReadableDocument:
    """Main content and metadata isolated from a page.

    Timestamps are None when the page does not declare them. Mapping them
    to epoch seconds is left to the assembler.

    Attributes:
        content: The isolated main-content HTML fragment
        text_content: Plain-text rendering of content
        title: Article headline
        byline: Author name(s)
        excerpt: Short summary of the article
        site_name: Publisher or site name
        image: Absolute URL of the lead image
        favicon: Absolute URL of the site icon
        language: Language tag of the document
        published_time: Publish time, if declared
        modified_time: Last modification time, if declared
        length: Number of characters in text_content
    """
    content: str
    text_content: str
    title: str = ""
    byline: str = ""
    excerpt: str = ""
    site_name: str = ""
    image: str = ""
    favicon: str = ""
    language: str = ""
    published_time: datetime | None = None
    modified_time: datetime | None = None
    length: int = 0


@dataclass(frozen=True)
class Article:
    """The readable content of a web page plus its metadata.

    Built once per extraction call and never mutated afterwards. Every
    field has a zero value (empty string or 0), and an Article with all
    fields at their zero value is what failed extractions carry.

    Attributes:
        title: Extracted headline
        author: Byline, empty when unattributed
        html_content: Isolated main-content HTML fragment
        text_content: Plain-text rendering of html_content
        markdown_content: Markdown rendering with absolute links and images
        length: Character count reported by the extractor
        excerpt: Short summary or first paragraph
        site_name: Publisher name
        image: Absolute URL of the lead image
        favicon: Absolute URL of the site icon
        language: Detected language tag
        published_at: Publish time in epoch seconds, 0 when unknown
        modified_at: Last-modified time in epoch seconds, 0 when unknown
    """
    title: str = ""
    author: str = ""
    html_content: str = ""
    text_content: str = ""
    markdown_content: str = ""
    length: int = 0
    excerpt: str = ""
    site_name: str = ""
    image: str = ""
    favicon: str = ""
    language: str = ""
    published_at: int = 0
    modified_at: int = 0

    @classmethod
    def empty(cls) -> Article:
        return cls()

    @property
    def is_empty(self) -> bool:
        return self == Article()

    @property
    def published_at_iso(self) -> str | None:
        return _iso_from_epoch(self.published_at)

    @property
    def modified_at_iso(self) -> str | None:
        return _iso_from_epoch(self.modified_at)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the article.

        The two timestamps are included both as epoch seconds and as
        ISO 8601 UTC strings (None when unknown).
        """
        data = asdict(self)
        data["published_at_iso"] = self.published_at_iso
        data["modified_at_iso"] = self.modified_at_iso
        return data


def _iso_from_epoch(value: int) -> str | None:
    if value <= 0:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
