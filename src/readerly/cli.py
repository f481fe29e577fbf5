"""readerly CLI."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from .config import Settings, get_settings
from .document import Document, ParseError
from .fetch import FetchError, from_file, from_url
from .logging_config import setup_colored_logging

logger = logging.getLogger(__name__)


def _load_settings() -> Settings:
    try:
        return get_settings()
    except ValidationError as e:
        click.echo(f"Error loading settings: {e}", err=True)
        click.echo("Check READERLY_* environment variables and .env", err=True)
        sys.exit(1)


def _open_document(source: str, base_url: Optional[str]) -> Document:
    """Load SOURCE, a URL or a file path, exiting with an error message on failure."""
    settings = _load_settings()
    try:
        if source.startswith(("http://", "https://")):
            logger.debug(f"[CLI] Fetching {source}")
            return from_url(source, settings)
        logger.debug(f"[CLI] Reading {source}")
        return from_file(Path(source), url=base_url, settings=settings)
    except (FetchError, ParseError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose):
    """readerly - Extract the readable article from a web page."""
    setup_colored_logging(verbose)


@cli.command()
@click.argument("source")
@click.option("--base-url", default=None, help="Base URL for relative links (file sources only)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["html", "text", "json"]),
    default="html",
    show_default=True,
    help="Output format",
)
def extract(source, base_url, output_format):
    """Extract the title and main content of SOURCE (URL or file)."""
    doc = _open_document(source, base_url)

    if output_format == "json":
        payload = {"title": doc.title(), "url": doc.url, "content": doc.content()}
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif output_format == "text":
        click.echo(doc.title())
        click.echo("")
        click.echo(doc.text())
    else:
        click.echo(doc.content())


@cli.command()
@click.argument("source")
def title(source):
    """Print the article title of SOURCE (URL or file)."""
    doc = _open_document(source, None)
    click.echo(doc.title())


if __name__ == "__main__":
    cli()
