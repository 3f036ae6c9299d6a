"""
Core domain models and errors.

This package contains data types, the error taxonomy and URL helpers
shared by every pipeline stage.
"""

from .types import Article, FetchResult, ReadableDocument
from .errors import (
    ConversionError,
    ExtractError,
    ExtractionError,
    FetchError,
    URLParseError,
)
from .urls import derive_base_url, parse_article_url

__all__ = [
    "Article",
    "FetchResult",
    "ReadableDocument",
    "ExtractError",
    "URLParseError",
    "FetchError",
    "ExtractionError",
    "ConversionError",
    "derive_base_url",
    "parse_article_url",
]
