"""CLI interface for chatport."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from . import __version__
from .config import LOG_LEVEL
from .errors import ConversionError
from .models import Conversation


def _setup_logging(verbose: bool) -> None:
    # Logging to stderr only — stdout carries command output
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(text, nl=False)


@click.group()
@click.version_option(version=__version__, prog_name="chatport")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """chatport — Detect chat export formats and convert Markdown transcripts.

    Detect what kind of chat export a file is, import Markdown transcripts
    into JSON conversations, and export conversations back to Markdown.
    """
    _setup_logging(verbose)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--content-only", is_flag=True, help="Ignore the file extension")
def detect(path: str, content_only: bool):
    """Print the detected format of an export file.

    Example:
        chatport detect ~/Downloads/chat.md
    """
    from .detector import detect_format
    from .importer import read_export, resolve_format

    content = read_export(path)
    if content_only:
        tag = detect_format(content)
    else:
        tag = resolve_format(content, Path(path).name)
    click.echo(tag.value)


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write JSON here instead of stdout")
def import_cmd(path: str, output: str | None):
    """Import an export file and print its conversations as JSON.

    Example:
        chatport import notes/chat.md -o chat.json
    """
    from .importer import import_file

    try:
        conversations = import_file(path)
    except ConversionError as e:
        raise click.ClickException(str(e)) from e

    data = [conv.model_dump(mode="json") for conv in conversations]
    _write_output(json.dumps(data, indent=2, ensure_ascii=False) + "\n", output)

    total_messages = sum(conv.message_count for conv in conversations)
    click.echo(
        f"Imported {len(conversations)} conversations ({total_messages} messages)",
        err=True,
    )


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write Markdown here instead of stdout")
def export(path: str, output: str | None):
    """Export conversations from a JSON file (as written by import) to Markdown."""
    from .exporter import export_conversation, export_conversations
    from .importer import read_export

    try:
        data = json.loads(read_export(path))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise click.ClickException("Expected a JSON object or array of conversations.")

    try:
        conversations = [Conversation.model_validate(item) for item in data]
    except ValidationError as e:
        raise click.ClickException(f"Invalid conversation data: {e}") from e

    if len(conversations) == 1:
        text = export_conversation(conversations[0])
    else:
        text = export_conversations(conversations)
    _write_output(text, output)
