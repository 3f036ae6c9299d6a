"""
Error taxonomy for the extraction pipeline.

Every stage raises a subclass of ExtractError carrying the stage name and
the URL being processed. Errors also carry the zero-value Article so that
callers always receive an empty record together with the failure, never a
partially filled one.
"""

from __future__ import annotations

from .types import Article


class ExtractError(Exception):
    """Base class for all extraction failures.

    Attributes:
        stage: Pipeline stage that failed ("url", "fetch", "extract", "convert")
        url: The URL being processed, if known
        cause: The underlying exception, if any
        article: Always the zero-value Article
    """

    stage = "extract"

    def __init__(self, message: str, url: str = "", cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.cause = cause
        self.article = Article.empty()

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


class URLParseError(ExtractError):
    """The input URL has no usable scheme or host."""

    stage = "url"


class FetchError(ExtractError):
    """The page could not be retrieved.

    Attributes:
        category: "timeout", "http_status", "network" or "not_html"
        status_code: HTTP status code, when a response was received
    """

    stage = "fetch"

    def __init__(
        self,
        message: str,
        url: str = "",
        cause: BaseException | None = None,
        category: str = "network",
        status_code: int | None = None,
    ):
        super().__init__(message, url=url, cause=cause)
        self.category = category
        self.status_code = status_code

    @property
    def timed_out(self) -> bool:
        return self.category == "timeout"


class ExtractionError(ExtractError):
    """No article-like content could be isolated from the page."""

    stage = "extract"


class ConversionError(ExtractError):
    """The isolated fragment could not be rendered as Markdown."""

    stage = "convert"
