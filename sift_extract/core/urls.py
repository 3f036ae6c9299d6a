"""URL validation and base URL derivation."""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit

from .errors import URLParseError

_ALLOWED_SCHEMES = ("http", "https")


def parse_article_url(url: str) -> SplitResult:
    """Split an article URL and check it is an absolute http(s) URL.

    Args:
        url: The URL supplied by the caller

    Returns:
        The split URL

    Raises:
        URLParseError: If the URL is empty, relative, has an unsupported
            scheme, or has no host
    """
    if not isinstance(url, str) or not url.strip():
        raise URLParseError("empty URL", url=url if isinstance(url, str) else "")

    candidate = url.strip()
    try:
        parts = urlsplit(candidate)
        # Accessing port validates it (raises ValueError when out of range)
        parts.port
    except ValueError as exc:
        raise URLParseError(f"malformed URL {candidate!r}: {exc}", url=candidate, cause=exc) from exc

    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise URLParseError(
            f"unsupported scheme {parts.scheme or '(none)'!r} in {candidate!r}", url=candidate
        )
    if not parts.hostname:
        raise URLParseError(f"missing host in {candidate!r}", url=candidate)
    return parts


def derive_base_url(url: str) -> str:
    """Return scheme and host of a URL, dropping path, query and fragment.

    Used as the base for resolving relative links in the Markdown output.

    Examples:
        >>> derive_base_url("https://example.com/articles/x?y=1#z")
        'https://example.com'
    """
    parts = parse_article_url(url)
    # Credentials never leak into rendered links; the port is kept
    host = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme.lower()}://{host}"
