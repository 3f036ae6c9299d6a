"""
Command-line interface for sift-extract.

Uses Typer to expose the extraction pipeline with options for the main
configuration settings.
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console

from .config import load_config
from .core.errors import ExtractError
from .logging_utils import setup_logging
from .pipeline import extract_url_content

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)

_FORMATS = ("markdown", "text", "html", "json")


@app.callback()
def main() -> None:
    """Extract readable article content from web pages."""


@app.command()
def extract(
    url: str = typer.Argument(..., help="Absolute http(s) URL of the page."),
    format: str = typer.Option(
        "markdown", "--format", "-f", help="Output format: markdown, text, html or json."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write output to a file."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    timeout: float | None = typer.Option(None, "--timeout", help="Fetch timeout in seconds."),
    user_agent: str | None = typer.Option(None, "--user-agent", help="User-Agent header."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
):
    """Extract one page and print its content.

    Args:
        url: Page to extract
        format: Output format (markdown, text, html, json)
        output: Optional file to write instead of stdout
        config: Optional path to YAML config file
        timeout: Override fetch timeout
        user_agent: Override User-Agent header
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    if format not in _FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(_FORMATS)}", param_hint="--format")

    cfg = load_config(str(config) if config else None)

    if timeout is not None:
        cfg.fetch.timeout_seconds = timeout
    if user_agent:
        cfg.fetch.user_agent = user_agent
    if log_level:
        cfg.logging.level = log_level

    logger = setup_logging(cfg.logging)

    try:
        article = extract_url_content(url, cfg, logger=logger)
    except ExtractError as exc:
        err_console.print(f"[red]Extraction failed[/red] ({exc.stage}): {exc.message}")
        raise typer.Exit(code=1)

    if format == "json":
        rendered = json.dumps(article.to_dict(), ensure_ascii=False, indent=2)
    elif format == "text":
        rendered = article.text_content
    elif format == "html":
        rendered = article.html_content
    else:
        rendered = _markdown_document(article.title, article.markdown_content)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered + "\n", encoding="utf-8")
        console.print(f"Article written: {output}")
    else:
        typer.echo(rendered)


def _markdown_document(title: str, body: str) -> str:
    if not title:
        return body
    return f"# {title}\n\n{body}"


if __name__ == "__main__":
    app()
