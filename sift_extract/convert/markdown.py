"""
HTML to Markdown conversion.

Relative href/src values are resolved against a base URL in a
BeautifulSoup pre-pass, then the fragment is rendered by markdownify.
The output depends only on the fragment, the base URL and the options.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString
from markdownify import BACKSLASH, MarkdownConverter

from ..config import MarkdownConfig
from ..core.errors import ConversionError

_LINK_ATTRS = {
    "a": "href",
    "img": "src",
    "source": "src",
    "video": "src",
    "audio": "src",
}
_UNRESOLVED_PREFIXES = ("#", "mailto:", "tel:", "javascript:", "data:")
_WHITESPACE_RE = re.compile(r"\s+")
_PRESERVED_TAGS = ["pre", "code", "textarea"]
_FENCE = "```"


def convert_to_markdown(fragment: str, base_url: str = "", cfg: MarkdownConfig | None = None) -> str:
    """Render an HTML fragment as Markdown.

    Args:
        fragment: The HTML fragment to convert
        base_url: Base for resolving relative links and images; an empty
            string leaves them untouched
        cfg: Conversion settings

    Returns:
        Markdown text with outer whitespace stripped

    Raises:
        ConversionError: If the fragment is not a string or the converter fails
    """
    cfg = cfg or MarkdownConfig()
    if not isinstance(fragment, str):
        raise ConversionError(f"expected an HTML string, got {type(fragment).__name__}")

    try:
        soup = BeautifulSoup(fragment, "html.parser")
        for tag in soup(cfg.strip_tags):
            tag.decompose()
        if base_url and cfg.resolve_links:
            resolve_links(soup, base_url)
        collapse_whitespace(soup)
        converter = MarkdownConverter(
            heading_style=cfg.heading_style,
            bullets=cfg.bullets,
            newline_style=BACKSLASH,
        )
        markdown = converter.convert_soup(soup)
    except Exception as exc:  # noqa: BLE001
        raise ConversionError(f"{type(exc).__name__}: {exc}", cause=exc) from exc

    return _tidy(markdown)


def resolve_links(soup: BeautifulSoup, base_url: str) -> None:
    """Rewrite relative link and media URLs in place."""
    for name, attr in _LINK_ATTRS.items():
        for tag in soup.find_all(name):
            value = tag.get(attr)
            if not isinstance(value, str):
                continue
            value = value.strip()
            if not value or value.lower().startswith(_UNRESOLVED_PREFIXES):
                continue
            tag[attr] = urljoin(base_url, value)


def collapse_whitespace(soup: BeautifulSoup) -> None:
    """Collapse whitespace runs in text nodes outside preformatted content."""
    for text in soup.find_all(string=True):
        if type(text) is not NavigableString:
            continue
        if text.find_parent(_PRESERVED_TAGS) is not None:
            continue
        collapsed = _WHITESPACE_RE.sub(" ", str(text))
        if collapsed != text:
            text.replace_with(NavigableString(collapsed))


def _tidy(markdown: str) -> str:
    """Drop trailing spaces and repeated blank lines outside fenced code."""
    lines: list[str] = []
    in_fence = False
    for line in markdown.split("\n"):
        if line.lstrip().startswith(_FENCE):
            in_fence = not in_fence
            lines.append(line.rstrip())
            continue
        if in_fence:
            lines.append(line)
            continue
        line = line.rstrip()
        if not line and (not lines or not lines[-1]):
            continue
        lines.append(line)
    return "\n".join(lines).strip()
