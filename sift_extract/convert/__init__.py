"""Markdown rendering of extracted content."""

from .markdown import convert_to_markdown, resolve_links

__all__ = ["convert_to_markdown", "resolve_links"]
