"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FetchConfig: HTTP fetching settings
- ExtractConfig: Readability extraction settings
- MarkdownConfig: HTML to Markdown conversion settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Library calls use the AppConfig() defaults; nothing is read from disk
unless load_config is called explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

import yaml


@dataclass
class FetchConfig:
    """Configuration for HTTP page fetching.

    Attributes:
        timeout_seconds: Total time budget for one fetch, body streaming included
        user_agent: User-Agent header presented to servers
        trust_env: Whether to respect system proxy settings
        follow_redirects: Whether to follow HTTP redirects
    """

    timeout_seconds: float = 30.0
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    trust_env: bool = True
    follow_redirects: bool = True


@dataclass
class ExtractConfig:
    """Configuration for readability extraction.

    Attributes:
        min_text_length: Minimum paragraph length considered by readability
        retry_length: Content length under which readability retries less strictly
        positive_keywords: Class/id keywords that boost a candidate block
        negative_keywords: Class/id keywords that penalize a candidate block
    """

    min_text_length: int = 25
    retry_length: int = 250
    positive_keywords: list[str] = field(default_factory=list)
    negative_keywords: list[str] = field(default_factory=list)


@dataclass
class MarkdownConfig:
    """Configuration for Markdown conversion.

    Attributes:
        heading_style: markdownify heading style ("ATX", "ATX_CLOSED", "SETEXT")
        bullets: Characters used for list bullets, cycled by nesting depth
        strip_tags: Tags removed together with their content before conversion
        resolve_links: Whether to resolve relative href/src against the base URL
    """

    heading_style: str = "ATX"
    bullets: str = "-"
    strip_tags: list[str] = field(default_factory=lambda: ["script", "style", "noscript"])
    resolve_links: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
        directory: Directory for the log file (current directory when None)
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "sift-extract.jsonl"
    directory: str | None = None


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS: dict[str, type] = {
    "fetch": FetchConfig,
    "extract": ExtractConfig,
    "markdown": MarkdownConfig,
    "logging": LoggingConfig,
}


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig.

    Unknown sections and unknown keys are ignored.
    """
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict):
            known = set(data[key])
            data[key].update({k: v for k, v in value.items() if k in known})
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    data: dict[str, Any] = {}
    for name in _SECTIONS:
        section = getattr(cfg, name)
        data[name] = {f.name: _copy(getattr(section, f.name)) for f in fields(section)}
    return data


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(**{name: cls(**data[name]) for name, cls in _SECTIONS.items()})


def _copy(value: Any) -> Any:
    if isinstance(value, list):
        return list(value)
    return value
