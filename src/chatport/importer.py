"""Import pipeline: format detection → converter dispatch → conversations."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import click

from .detector import detect_format, detect_format_by_extension
from .errors import ConversionError
from .models import Conversation, FormatTag
from .parser import MarkdownConverter

logger = logging.getLogger(__name__)


class ChatFormatConverter(Protocol):
    """Anything that turns raw file content of one format into conversations."""

    supported_format: FormatTag

    def convert(self, content: str) -> list[Conversation]: ...


CONVERTERS: dict[FormatTag, ChatFormatConverter] = {
    FormatTag.MARKDOWN: MarkdownConverter(),
}


def get_converter(tag: FormatTag) -> ChatFormatConverter:
    """Return the converter registered for ``tag``.

    Raises ConversionError for UNKNOWN and for formats with no converter.
    """
    if tag == FormatTag.UNKNOWN:
        raise ConversionError("Cannot import: unrecognised or unsupported format")

    converter = CONVERTERS.get(tag)
    if converter is None:
        raise ConversionError(f"No converter available for format '{tag.value}'")
    return converter


def resolve_format(content: str, filename: str | None = None) -> FormatTag:
    """Use the file extension when it is decisive, otherwise sniff the content."""
    if filename:
        tag = detect_format_by_extension(filename)
        if tag is not None:
            logger.debug("Format %s from extension of %s", tag.value, filename)
            return tag
    return detect_format(content)


def import_content(content: str, filename: str | None = None) -> list[Conversation]:
    """Detect the format of ``content`` and convert it."""
    tag = resolve_format(content, filename)
    converter = get_converter(tag)
    conversations = converter.convert(content)
    logger.info("Imported %d conversations as %s", len(conversations), tag.value)
    return conversations


def read_export(path: str) -> str:
    """Read an export file as UTF-8 text."""
    file = Path(path)

    if not file.exists():
        raise click.ClickException(f"File not found: {path}")

    try:
        return file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise click.ClickException(f"Not a UTF-8 text file: {path} ({e.reason})") from e


def import_file(path: str) -> list[Conversation]:
    """Read a UTF-8 export file and import it."""
    content = read_export(path)
    return import_content(content, filename=Path(path).name)
