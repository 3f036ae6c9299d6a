"""
Page metadata extraction.

Metadata is collected from three sources, in priority order:
1. JSON-LD blocks describing an article (schema.org)
2. <meta> tags (OpenGraph, Twitter cards, Dublin Core, article:*)
3. Document fallbacks (in-page byline, <html lang>, <link rel="icon">)

Values are whitespace-normalized; image and icon URLs are made absolute
against the page URL. Timestamps are returned as raw strings and parsed
by parse_timestamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import json
import re
from typing import Any
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser


_ARTICLE_TYPES = {
    "article",
    "advertisercontentarticle",
    "newsarticle",
    "analysisnewsarticle",
    "askpublicnewsarticle",
    "backgroundnewsarticle",
    "opinionnewsarticle",
    "reportagenewsarticle",
    "reviewnewsarticle",
    "report",
    "satiricalarticle",
    "scholarlyarticle",
    "medicalscholarlyarticle",
    "socialmediaposting",
    "blogposting",
    "liveblogposting",
    "discussionforumposting",
    "techarticle",
    "apireference",
}

_TITLE_KEYS = (
    "dc:title",
    "dcterm:title",
    "dcterms:title",
    "og:title",
    "weibo:article:title",
    "weibo:webpage:title",
    "title",
    "twitter:title",
)
_BYLINE_KEYS = ("dc:creator", "dcterm:creator", "dcterms:creator", "author", "article:author")
_EXCERPT_KEYS = (
    "dc:description",
    "dcterm:description",
    "dcterms:description",
    "og:description",
    "weibo:article:description",
    "weibo:webpage:description",
    "description",
    "twitter:description",
)
_SITE_NAME_KEYS = ("og:site_name", "application-name")
_IMAGE_KEYS = (
    "og:image",
    "og:image:url",
    "og:image:secure_url",
    "image",
    "twitter:image",
    "twitter:image:src",
)
_PUBLISHED_KEYS = (
    "article:published_time",
    "og:article:published_time",
    "dcterms:available",
    "dcterms:created",
    "dcterms:issued",
    "weibo:article:create_at",
    "datepublished",
    "date",
    "pubdate",
)
_MODIFIED_KEYS = ("article:modified_time", "og:updated_time", "dcterms:modified", "datemodified")

_BYLINE_CLASS_RE = re.compile(r"byline|author|dateline|writtenby|p-author", re.I)
_BYLINE_PREFIX_RE = re.compile(r"^(by|written by|posted by|author:?)\s+", re.I)
_URL_LIKE_RE = re.compile(r"^(https?:)?//", re.I)
_MAX_BYLINE_CHARS = 100

# Naive timestamps are read as UTC; missing date parts never come from today
_DEFAULT_DATE = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class PageMetadata:
    """Metadata declared by a page.

    Every field is an empty string when the page does not declare it.
    """
    title: str = ""
    byline: str = ""
    excerpt: str = ""
    site_name: str = ""
    image: str = ""
    favicon: str = ""
    language: str = ""
    published_time: str = ""
    modified_time: str = ""


def extract_metadata(soup: BeautifulSoup, url: str) -> PageMetadata:
    """Collect metadata from a parsed page.

    Args:
        soup: The whole page parsed with BeautifulSoup
        url: The page URL, used to make image and icon URLs absolute

    Returns:
        PageMetadata with the first value found for each field
    """
    ld = _json_ld_metadata(soup)
    meta = _meta_tags(soup)

    byline = ld.get("byline") or _first(meta, _BYLINE_KEYS, skip_urls=True) or _page_byline(soup)
    image = ld.get("image") or _first(meta, _IMAGE_KEYS)

    return PageMetadata(
        title=ld.get("title") or _first(meta, _TITLE_KEYS),
        byline=_clean_byline(byline),
        excerpt=ld.get("excerpt") or _first(meta, _EXCERPT_KEYS),
        site_name=ld.get("site_name") or _first(meta, _SITE_NAME_KEYS),
        image=_absolute(url, image),
        favicon=_absolute(url, _favicon(soup)),
        language=_language(soup, meta),
        published_time=ld.get("published_time") or _first(meta, _PUBLISHED_KEYS),
        modified_time=ld.get("modified_time") or _first(meta, _MODIFIED_KEYS),
    )


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a declared timestamp into an aware datetime.

    Accepts ISO 8601 and the looser formats dateutil understands. Naive
    values are taken as UTC. Returns None when the value is empty or
    cannot be parsed.
    """
    if not value or not value.strip():
        return None
    text = value.strip()
    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, OverflowError):
        try:
            parsed = date_parser.parse(text, default=_DEFAULT_DATE)
        except (ValueError, OverflowError, TypeError):
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_space(text: str | None) -> str:
    if not text:
        return ""
    return " ".join(text.split())


def _json_ld_metadata(soup: BeautifulSoup) -> dict[str, str]:
    for script in soup.find_all("script", attrs={"type": re.compile(r"application/ld\+json", re.I)}):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, ValueError):
            continue
        for node in _iter_ld_nodes(payload):
            if _is_article_node(node):
                return _read_ld_article(node)
    return {}


def _iter_ld_nodes(payload: Any):
    if isinstance(payload, list):
        for item in payload:
            yield from _iter_ld_nodes(item)
    elif isinstance(payload, dict):
        yield payload
        graph = payload.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                yield from _iter_ld_nodes(item)


def _is_article_node(node: dict[str, Any]) -> bool:
    kind = node.get("@type")
    kinds = kind if isinstance(kind, list) else [kind]
    return any(isinstance(k, str) and k.lower() in _ARTICLE_TYPES for k in kinds)


def _read_ld_article(node: dict[str, Any]) -> dict[str, str]:
    data: dict[str, str] = {}
    title = node.get("headline") or node.get("name")
    if isinstance(title, str):
        data["title"] = normalize_space(title)

    names = [name for name in (_ld_name(a) for a in _as_list(node.get("author"))) if name]
    if names:
        data["byline"] = ", ".join(names)

    description = node.get("description")
    if isinstance(description, str):
        data["excerpt"] = normalize_space(description)

    publisher = _ld_name(node.get("publisher"))
    if publisher:
        data["site_name"] = publisher

    image = _ld_url(node.get("image"))
    if image:
        data["image"] = image

    for key, field in (("datePublished", "published_time"), ("dateModified", "modified_time")):
        value = node.get(key)
        if isinstance(value, str) and value.strip():
            data[field] = value.strip()
    return data


def _ld_name(value: Any) -> str:
    if isinstance(value, str):
        return normalize_space(value)
    if isinstance(value, dict):
        name = value.get("name")
        if isinstance(name, str):
            return normalize_space(name)
    return ""


def _ld_url(value: Any) -> str:
    for item in _as_list(value):
        if isinstance(item, str) and item.strip():
            return item.strip()
        if isinstance(item, dict):
            candidate = item.get("url") or item.get("contentUrl")
            if isinstance(candidate, str) and candidate.strip():
                return candidate.strip()
    return ""


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _meta_tags(soup: BeautifulSoup) -> dict[str, str]:
    values: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        content = normalize_space(tag.get("content"))
        if not content:
            continue
        raw_keys = tag.get("property") or tag.get("name") or tag.get("itemprop") or ""
        for key in str(raw_keys).split():
            key = key.lower().replace(".", ":")
            values.setdefault(key, content)
    return values


def _first(meta: dict[str, str], keys: tuple[str, ...], skip_urls: bool = False) -> str:
    for key in keys:
        value = meta.get(key, "")
        if not value:
            continue
        if skip_urls and _URL_LIKE_RE.match(value):
            continue
        return value
    return ""


def _page_byline(soup: BeautifulSoup) -> str:
    """Find an author line in the page body."""
    body = soup.body or soup
    for tag in body.find_all(True):
        if not isinstance(tag, Tag):
            continue
        rel = tag.get("rel") or []
        itemprop = str(tag.get("itemprop") or "")
        match_string = " ".join(
            [" ".join(tag.get("class") or []), str(tag.get("id") or "")]
        )
        if "author" in rel or "author" in itemprop or _BYLINE_CLASS_RE.search(match_string):
            text = normalize_space(tag.get_text(" "))
            if 0 < len(text) < _MAX_BYLINE_CHARS:
                return text
    return ""


def _clean_byline(byline: str) -> str:
    return _BYLINE_PREFIX_RE.sub("", normalize_space(byline)).strip()


def _language(soup: BeautifulSoup, meta: dict[str, str]) -> str:
    html = soup.find("html")
    if isinstance(html, Tag):
        lang = normalize_space(html.get("lang") or html.get("xml:lang"))
        if lang:
            return lang
    for tag in soup.find_all("meta", attrs={"http-equiv": True}):
        if str(tag.get("http-equiv")).lower() == "content-language":
            lang = normalize_space(tag.get("content"))
            if lang:
                return lang.split(",")[0].strip()
    return meta.get("og:locale", "").replace("_", "-")


def _favicon(soup: BeautifulSoup) -> str:
    """Return the href of the largest declared icon."""
    best_href = ""
    best_size = -1
    for link in soup.find_all("link", href=True):
        rel = link.get("rel") or []
        if isinstance(rel, str):
            rel = rel.split()
        if "icon" not in [r.lower() for r in rel]:
            continue
        size = _icon_size(str(link.get("sizes") or ""))
        if size > best_size:
            best_size = size
            best_href = str(link["href"]).strip()
    return best_href


def _icon_size(sizes: str) -> int:
    if sizes.strip().lower() == "any":
        return 1 << 16
    best = 0
    for token in sizes.lower().split():
        width, _, height = token.partition("x")
        if width.isdigit() and height.isdigit():
            best = max(best, min(int(width), int(height)))
    return best


def _absolute(base: str, href: str) -> str:
    if not href:
        return ""
    if href.startswith("data:"):
        return href
    return urljoin(base, href)
