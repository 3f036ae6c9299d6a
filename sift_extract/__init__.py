"""
sift-extract - readable article extraction for web pages.

Given a URL, this package fetches the page, isolates the main article
content from navigation, ads and comments, derives its metadata and
renders the content as plain text and Markdown with absolute links.

Example:
    >>> from sift_extract import extract_url_content
    >>> article = extract_url_content("https://example.com")
    >>> article.title
    'Example Domain'
"""

__all__ = [
    "__version__",
    "Article",
    "extract_url_content",
    "try_extract_url_content",
    "ExtractError",
    "URLParseError",
    "FetchError",
    "ExtractionError",
    "ConversionError",
]
__version__ = "0.1.0"

from .core.errors import ConversionError, ExtractError, ExtractionError, FetchError, URLParseError
from .core.types import Article
from .pipeline import extract_url_content, try_extract_url_content
