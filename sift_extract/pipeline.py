"""
Article extraction pipeline.

This module coordinates a single extraction:
1. Validate the URL and derive the base URL used for link resolution
2. Fetch the page
3. Isolate the readable content and its metadata
4. Render the content as Markdown
5. Assemble the immutable Article

Each call is synchronous and single-shot. Any stage failure is raised
immediately; no partially filled Article is ever returned.
"""

from __future__ import annotations

from datetime import datetime
import logging
import time

from .config import AppConfig
from .convert.markdown import convert_to_markdown
from .core.errors import ExtractError
from .core.types import Article, ReadableDocument
from .core.urls import derive_base_url, parse_article_url
from .fetch.extractor import extract_readable
from .fetch.fetcher import fetch_url
from .logging_utils import get_logger, log_event


def extract_url_content(
    url: str,
    cfg: AppConfig | None = None,
    logger: logging.Logger | None = None,
) -> Article:
    """Extract the readable content of a web page.

    Args:
        url: Absolute http(s) URL of the page
        cfg: Application configuration (defaults when None)
        logger: Logger for pipeline events

    Returns:
        The populated Article

    Raises:
        URLParseError: If the URL has no usable scheme or host
        FetchError: On network, timeout, HTTP status or content type failures
        ExtractionError: If no readable content could be isolated
        ConversionError: If the content could not be rendered as Markdown
    """
    cfg = cfg or AppConfig()
    logger = logger or get_logger()
    started = time.monotonic()

    try:
        target = parse_article_url(url).geturl()
        base_url = derive_base_url(target)
        page = fetch_url(target, cfg.fetch, logger=logger)
        document = extract_readable(page.text, page.final_url or target, cfg.extract, logger=logger)
        markdown = convert_to_markdown(document.content, base_url, cfg.markdown)
    except ExtractError as exc:
        if not exc.url:
            exc.url = url
        log_event(
            logger,
            "extraction failed",
            level=logging.WARNING,
            url=url,
            stage=exc.stage,
            error=exc.message,
            category=getattr(exc, "category", None),
        )
        raise

    article = assemble_article(document, markdown)
    log_event(
        logger,
        "extraction done",
        url=url,
        title=article.title,
        length=article.length,
        elapsed_ms=int((time.monotonic() - started) * 1000),
    )
    return article


def try_extract_url_content(
    url: str,
    cfg: AppConfig | None = None,
    logger: logging.Logger | None = None,
) -> tuple[Article, ExtractError | None]:
    """Extract a page, returning the failure instead of raising it.

    Returns:
        (article, None) on success, or (empty Article, error) on failure
    """
    try:
        return extract_url_content(url, cfg, logger), None
    except ExtractError as exc:
        return exc.article, exc


def assemble_article(document: ReadableDocument, markdown: str) -> Article:
    """Map extractor output and the Markdown rendering into an Article.

    The length measure is copied unchanged; timestamps become epoch seconds.
    """
    return Article(
        title=document.title,
        author=document.byline,
        html_content=document.content,
        text_content=document.text_content,
        markdown_content=markdown,
        length=document.length,
        excerpt=document.excerpt,
        site_name=document.site_name,
        image=document.image,
        favicon=document.favicon,
        language=document.language,
        published_at=to_epoch_seconds(document.published_time),
        modified_at=to_epoch_seconds(document.modified_time),
    )


def to_epoch_seconds(value: datetime | None) -> int:
    """Convert a timestamp to Unix seconds.

    None maps to 0 ("unknown"). Times before the epoch also map to 0.
    """
    if value is None:
        return 0
    return max(int(value.timestamp()), 0)
