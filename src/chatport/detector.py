"""Guess which chat export format a file holds.

Detection is a cascade of checks evaluated in order; the first check that
matches decides the format. Nothing in here raises: content that cannot be
recognised comes back as UNKNOWN or PLAIN_TEXT.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable

from .models import FormatTag
from .text import split_lines

logger = logging.getLogger(__name__)

ROLE_HEADER_RE = re.compile(r"^##\s*(User|Assistant|AI|用户|助手|🤖|👤).*", re.IGNORECASE)

CSV_HEADER_KEYWORDS = ("timestamp", "role", "content", "sender")

EXTENSION_FORMATS: dict[str, FormatTag | None] = {
    "json": None,  # JSON flavours need the content to tell apart
    "md": FormatTag.MARKDOWN,
    "markdown": FormatTag.MARKDOWN,
    "csv": FormatTag.CSV,
    "txt": FormatTag.PLAIN_TEXT,
    "html": FormatTag.UNKNOWN,
    "htm": FormatTag.UNKNOWN,
}


def _is_markdown(content: str) -> bool:
    """Needs both a heading and at least one role header (## User, ## 🤖 ...)."""
    lines = [line.strip() for line in split_lines(content)]
    has_headers = any(line.startswith("#") for line in lines)
    has_role_headers = any(ROLE_HEADER_RE.match(line) for line in lines)
    return has_headers and has_role_headers


def _is_csv(content: str) -> bool:
    lines = [line for line in split_lines(content) if line.strip()]
    if not lines:
        return False

    header = lines[0].lower()
    has_csv_header = any(keyword in header for keyword in CSV_HEADER_KEYWORDS)
    comma_lines = sum(1 for line in lines if "," in line)
    return has_csv_header and comma_lines > len(lines) // 2


def _looks_like_json(content: str) -> bool:
    return content.startswith("{") or content.startswith("[")


def _detect_json_object(obj: dict[str, Any]) -> FormatTag:
    """Classify a JSON object by its keys."""
    keys = set(obj)

    if "mapping" in keys and "current_node" in keys:
        return FormatTag.CHATGPT

    if {"id", "title", "messages", "createdAt"} <= keys:
        return FormatTag.OPERIT

    if "uuid" in keys or "chat_messages" in keys:
        return FormatTag.CLAUDE

    if "role" in keys and "content" in keys:
        return FormatTag.GENERIC_JSON

    messages = obj.get("messages")
    if isinstance(messages, list) and messages:
        first = messages[0]
        if isinstance(first, dict) and "role" in first and "content" in first:
            return FormatTag.GENERIC_JSON

    # Anything else that parsed as an object is still worth a generic attempt
    return FormatTag.GENERIC_JSON


def _detect_json(content: str) -> FormatTag:
    try:
        data = json.loads(content)
    except (ValueError, RecursionError):
        logger.debug("Content looks like JSON but does not parse", exc_info=True)
        return FormatTag.UNKNOWN

    if isinstance(data, list):
        if not data:
            return FormatTag.GENERIC_JSON
        first = data[0]
        if isinstance(first, dict):
            return _detect_json_object(first)
        return FormatTag.GENERIC_JSON

    if isinstance(data, dict):
        return _detect_json_object(data)

    return FormatTag.UNKNOWN


# Text checks in priority order: (predicate, format)
TEXT_CHECKS: list[tuple[Callable[[str], bool], FormatTag]] = [
    (_is_markdown, FormatTag.MARKDOWN),
    (_is_csv, FormatTag.CSV),
]


def detect_format(content: str) -> FormatTag:
    """Detect the export format of raw file content."""
    if not content.strip():
        return FormatTag.UNKNOWN

    trimmed = content.strip()

    for check, tag in TEXT_CHECKS:
        if check(trimmed):
            return tag

    if _looks_like_json(trimmed):
        return _detect_json(trimmed)

    return FormatTag.PLAIN_TEXT


def detect_format_by_extension(filename: str) -> FormatTag | None:
    """Guess the format from a file name.

    Returns None when the extension is unknown or (for .json) when the
    content has to be inspected to decide.
    """
    # Everything after the last dot, so ".md" counts as Markdown
    suffix = filename.rsplit(".", 1)[-1].lower()
    return EXTENSION_FORMATS.get(suffix)
