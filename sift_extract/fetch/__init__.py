"""
Page fetching and readable content extraction.

This package handles the HTTP fetch, isolation of the main article
content and derivation of page metadata.
"""

from .fetcher import fetch_url
from .extractor import extract_readable
from .metadata import PageMetadata, extract_metadata, parse_timestamp

__all__ = [
    "fetch_url",
    "extract_readable",
    "PageMetadata",
    "extract_metadata",
    "parse_timestamp",
]
