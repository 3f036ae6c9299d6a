"""
Shared fixtures: static pages served through an httpx mock transport.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from sift_extract import pipeline
from sift_extract.fetch import fetcher


EXAMPLE_PAGE = """<!doctype html>
<html lang="en">
<head>
    <title>Example Domain</title>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
</head>
<body>
<div>
    <h1>Example Domain</h1>
    <p>This domain is for use in illustrative examples in documents. You may use this
    domain in literature without prior coordination or asking for permission.</p>
    <p><a href="https://www.iana.org/domains/example">More information...</a></p>
</div>
</body>
</html>
"""

EXAMPLE_EXCERPT = (
    "This domain is for use in illustrative examples in documents. You may use this "
    "domain in literature without prior coordination or asking for permission."
)

EXAMPLE_MARKDOWN = (
    "This domain is for use in illustrative examples in documents. You may use this "
    "domain in literature without prior coordination or asking for permission.\n\n"
    "[More information...](https://www.iana.org/domains/example)"
)

RELATIVE_LINK_PAGE = EXAMPLE_PAGE.replace(
    "https://www.iana.org/domains/example", "/domains/example"
)

NEWS_PAGE = """<!doctype html>
<html lang="en-GB">
<head>
    <title>Rivers Return | The Daily Example</title>
    <meta property="og:title" content="Rivers return to the valley" />
    <meta property="og:site_name" content="The Daily Example" />
    <meta property="og:image" content="/media/river.jpg" />
    <meta name="description" content="After a decade of drought the valley rivers are flowing again." />
    <meta name="author" content="By Jane Doe" />
    <meta property="article:published_time" content="2024-03-01T10:00:00Z" />
    <meta property="article:modified_time" content="2024-03-02T08:30:00+00:00" />
    <link rel="icon" href="/favicon-16.png" sizes="16x16" />
    <link rel="icon" href="/favicon-192.png" sizes="192x192" />
</head>
<body>
<nav class="menu">
    <ul><li><a href="/">Home</a></li><li><a href="/world">World</a></li><li><a href="/sport">Sport</a></li></ul>
</nav>
<div class="article-body">
    <h2>Rivers return to the valley</h2>
    <p>After a decade of drought, the rivers of the northern valley are flowing again, and the
    farmers who stayed through the dry years are planting crops they had almost forgotten.</p>
    <p>Local officials credit a combination of unusually heavy winter snow and a restoration
    project that rebuilt wetlands along the upper reaches of the river system.</p>
    <p>Read the <a href="/reports/wetlands">full wetlands report</a> for the details of the
    restoration work, including maps, timelines and the budget approved by the council.</p>
    <p>Scientists caution that a single wet year does not end a drought, but the change has
    already brought birds, fish and tourists back to towns that had been emptying out.</p>
</div>
<footer class="footer"><p>Copyright The Daily Example. All rights reserved.</p></footer>
</body>
</html>
"""


def make_transport(
    body: str = EXAMPLE_PAGE,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Build a transport answering every request with one HTML page."""

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, html=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def serve_page(monkeypatch) -> Callable[..., list[httpx.Request]]:
    """Route the pipeline's fetches to a mock transport serving a page.

    Returns a function taking the page body (and optional status code)
    that returns the list of requests seen by the transport.
    """

    def _serve(body: str = EXAMPLE_PAGE, status_code: int = 200) -> list[httpx.Request]:
        seen: list[httpx.Request] = []
        transport = make_transport(body, status_code, seen)

        def fake_fetch(url, cfg=None, logger=None):
            return fetcher.fetch_url(url, cfg, transport=transport, logger=logger)

        monkeypatch.setattr(pipeline, "fetch_url", fake_fetch)
        return seen

    return _serve
