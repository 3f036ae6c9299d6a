"""
HTTP page fetching.

A single synchronous GET per call using httpx, identified by a
browser-like User-Agent so that servers which vary content by agent still
serve full article markup. There are no retries: any failure is raised
as a FetchError classified by category. The timeout bounds the whole
exchange, including the time spent streaming the body.
"""

from __future__ import annotations

import logging
import time

import httpx

from ..config import FetchConfig
from ..core.errors import FetchError
from ..core.types import FetchResult
from ..logging_utils import get_logger, log_event

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


def fetch_url(
    url: str,
    cfg: FetchConfig | None = None,
    transport: httpx.BaseTransport | None = None,
    logger: logging.Logger | None = None,
) -> FetchResult:
    """Fetch a page using httpx.

    Args:
        url: The absolute http(s) URL to fetch
        cfg: Fetch settings (timeout, User-Agent, proxy handling)
        transport: Optional httpx transport, used to plug in mock transports
        logger: Logger for fetch events

    Returns:
        FetchResult with the decoded body of a 2xx HTML response

    Raises:
        FetchError: On timeout, network failure, non-2xx status or a
            non-HTML content type
    """
    cfg = cfg or FetchConfig()
    logger = logger or get_logger("fetch")
    headers = {
        "User-Agent": cfg.user_agent,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
    }

    log_event(logger, "fetch start", level=logging.DEBUG, url=url, timeout=cfg.timeout_seconds)
    deadline = time.monotonic() + cfg.timeout_seconds
    try:
        with httpx.Client(
            timeout=cfg.timeout_seconds,
            headers=headers,
            follow_redirects=cfg.follow_redirects,
            trust_env=cfg.trust_env,
            transport=transport,
        ) as client:
            with client.stream("GET", url) as resp:
                resp.raise_for_status()
                content_type = resp.headers.get("content-type", "")
                if not _is_html(content_type):
                    raise FetchError(
                        f"{url} is not an HTML document (Content-Type: {content_type})",
                        url=url,
                        category="not_html",
                        status_code=resp.status_code,
                    )
                chunks = []
                _check_deadline(deadline, url, cfg)
                for chunk in resp.iter_bytes():
                    chunks.append(chunk)
                    _check_deadline(deadline, url, cfg)
                body = b"".join(chunks)
                result = FetchResult(
                    url=url,
                    final_url=str(resp.url),
                    status_code=resp.status_code,
                    content_type=content_type,
                    text=body.decode(resp.encoding or "utf-8", errors="replace"),
                )
    except httpx.TimeoutException as exc:
        raise FetchError(
            _timeout_message(url, cfg),
            url=url,
            cause=exc,
            category="timeout",
        ) from exc
    except httpx.HTTPStatusError as exc:
        status_code = exc.response.status_code
        raise FetchError(
            f"HTTP {status_code} fetching {url}",
            url=url,
            cause=exc,
            category="http_status",
            status_code=status_code,
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(
            f"{type(exc).__name__}: {exc}",
            url=url,
            cause=exc,
            category="network",
        ) from exc

    log_event(
        logger,
        "fetch done",
        level=logging.DEBUG,
        url=url,
        final_url=result.final_url,
        status_code=result.status_code,
        chars=len(result.text),
    )
    return result


def _check_deadline(deadline: float, url: str, cfg: FetchConfig) -> None:
    """Enforce the overall time budget while the body streams in."""
    if time.monotonic() > deadline:
        raise FetchError(_timeout_message(url, cfg), url=url, category="timeout")


def _timeout_message(url: str, cfg: FetchConfig) -> str:
    return f"timed out after {cfg.timeout_seconds:g}s fetching {url}"


def _is_html(content_type: str) -> bool:
    """Check a Content-Type header value.

    A missing header is given the benefit of the doubt.
    """
    if not content_type:
        return True
    mime = content_type.split(";", 1)[0].strip().lower()
    return mime in _HTML_CONTENT_TYPES
