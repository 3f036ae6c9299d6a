"""
Readable content extraction.

The main article block is isolated with readability-lxml (Mozilla's
Readability algorithm, the one behind Firefox's Reader View). Plain text
is rendered with BeautifulSoup, and metadata is read from the whole page
by the metadata module.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from ..config import ExtractConfig
from ..core.errors import ExtractionError
from ..core.types import ReadableDocument
from ..logging_utils import get_logger, log_event
from .metadata import extract_metadata, normalize_space, parse_timestamp

# Returned by readability-lxml when the page has no <title>
_NO_TITLE = "[no-title]"


def extract_readable(
    html: str,
    url: str,
    cfg: ExtractConfig | None = None,
    logger: logging.Logger | None = None,
) -> ReadableDocument:
    """Isolate the main content of a page and derive its metadata.

    Args:
        html: The full page HTML
        url: The page URL, used to make relative links absolute
        cfg: Readability settings
        logger: Logger for extraction events

    Returns:
        ReadableDocument with the content fragment, its text and metadata

    Raises:
        ExtractionError: If the page is empty, cannot be parsed, or has no
            readable text
    """
    cfg = cfg or ExtractConfig()
    logger = logger or get_logger("extract")

    if not html or not html.strip():
        raise ExtractionError("empty document", url=url)

    try:
        doc = Document(
            html,
            url=url,
            min_text_length=cfg.min_text_length,
            retry_length=cfg.retry_length,
            positive_keywords=cfg.positive_keywords or None,
            negative_keywords=cfg.negative_keywords or None,
        )
        content = doc.summary(html_partial=True)
        fallback_title = doc.short_title()
    except Unparseable as exc:
        raise ExtractionError(f"unparseable document: {exc}", url=url, cause=exc) from exc

    metadata = extract_metadata(BeautifulSoup(html, "html.parser"), url)
    if fallback_title == _NO_TITLE:
        fallback_title = ""
    title = metadata.title or normalize_space(fallback_title)

    content_soup = BeautifulSoup(content, "html.parser")
    for wrapper in content_soup(["html", "body"]):
        wrapper.unwrap()
    _drop_title_heading(content_soup, title)
    content = str(content_soup)

    text_content = _extract_text(content_soup)
    if not text_content:
        raise ExtractionError("no readable content found", url=url)

    document = ReadableDocument(
        content=content,
        text_content=text_content,
        title=title,
        byline=metadata.byline,
        excerpt=metadata.excerpt or _first_paragraph(content_soup),
        site_name=metadata.site_name,
        image=metadata.image,
        favicon=metadata.favicon,
        language=metadata.language,
        published_time=parse_timestamp(metadata.published_time),
        modified_time=parse_timestamp(metadata.modified_time),
        length=len(text_content),
    )
    log_event(
        logger,
        "extract done",
        level=logging.DEBUG,
        url=url,
        title=document.title,
        length=document.length,
    )
    return document


def _drop_title_heading(soup: BeautifulSoup, title: str) -> None:
    """Remove the first h1/h2 that repeats the article title."""
    if not title:
        return
    wanted = title.casefold()
    for heading in soup.find_all(["h1", "h2"]):
        if normalize_space(heading.get_text()).casefold() == wanted:
            heading.decompose()
            return


def _extract_text(soup: BeautifulSoup) -> str:
    """Render plain text, keeping non-empty lines only."""
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = soup.get_text()
    return "\n".join([line.strip() for line in text.splitlines() if line.strip()])


def _first_paragraph(soup: BeautifulSoup) -> str:
    for paragraph in soup.find_all("p"):
        text = normalize_space(paragraph.get_text())
        if text:
            return text
    return ""
