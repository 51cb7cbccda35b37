"""Parse Markdown chat transcripts into Conversation models.

The accepted dialect is small: optional ``---`` front matter, an H1 title and
one H2 role header (``## 👤 User``, ``## Assistant`` ...) per message. A single
file may hold several such documents, separated by ``---`` lines or by new
H1 titles.
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime
from typing import Callable

from .config import (
    DEFAULT_GROUP,
    DEFAULT_TITLE,
    IMPORTED_PROVIDER,
    MARKDOWN_MODEL,
    MESSAGE_SPACING_MS,
)
from .dates import parse_date
from .errors import ConversionError
from .models import Conversation, FormatTag, Message, Sender
from .text import split_lines

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DOCUMENT_SPLIT_RE = re.compile(r"\n---+\n|\n# ")

USER_MARKERS = ("user", "用户", "👤")
AI_MARKERS = ("assistant", "ai", "助手", "🤖")
SYSTEM_MARKERS = ("system", "系统")


def split_documents(content: str) -> list[str]:
    """Split a stream into independent Markdown documents.

    The split eats the ``# `` of any H1 it breaks on, so every part after the
    first gets it back unless it already starts with a heading.
    """
    parts = [part.strip() for part in DOCUMENT_SPLIT_RE.split(content)]
    parts = [part for part in parts if part]

    if len(parts) <= 1:
        return [content]

    return [
        part if i == 0 or part.startswith("#") else f"# {part}"
        for i, part in enumerate(parts)
    ]


def parse_role(role_text: str) -> Sender:
    """Map role header text to a sender. System and unknown roles count as user."""
    lower = role_text.lower()
    if any(marker in lower for marker in USER_MARKERS):
        return Sender.USER
    if any(marker in lower for marker in AI_MARKERS):
        return Sender.AI
    if any(marker in lower for marker in SYSTEM_MARKERS):
        return Sender.USER
    return Sender.USER


def _parse_front_matter(lines: list[str]) -> tuple[dict[str, str], int]:
    """Read ``key: value`` pairs between two ``---`` lines.

    Returns the metadata and the index of the first line after the block.
    """
    metadata: dict[str, str] = {}
    if not lines or lines[0].strip() != "---":
        return metadata, 0

    i = 1
    while i < len(lines) and lines[i].strip() != "---":
        line = lines[i].strip()
        if ":" in line:
            key, value = line.split(":", 1)
            metadata[key.strip()] = value.strip()
        i += 1

    return metadata, i + 1  # skip the closing ---


def _make_message(sender: Sender, content: str, timestamp: int) -> Message:
    return Message(
        sender=sender,
        content=content.strip(),
        timestamp=timestamp,
        provider=IMPORTED_PROVIDER,
        model_name=MARKDOWN_MODEL,
    )


def parse_document(content: str, clock: Clock = datetime.now) -> Conversation | None:
    """Parse a single Markdown document.

    Returns None if the document has no messages.
    """
    lines = split_lines(content)
    title = DEFAULT_TITLE
    created_at = clock()

    metadata, start = _parse_front_matter(lines)
    if metadata:
        logger.debug("Front matter keys: %s", ", ".join(metadata))
    if "title" in metadata:
        title = metadata["title"]
    if "created" in metadata:
        created_at = parse_date(metadata["created"]) or created_at

    base_timestamp = int(clock().timestamp() * 1000)
    messages: list[Message] = []
    current_role: Sender | None = None
    buffer: list[str] = []

    def flush() -> None:
        if current_role is not None and buffer:
            timestamp = base_timestamp + len(messages) * MESSAGE_SPACING_MS
            messages.append(_make_message(current_role, "".join(buffer), timestamp))

    for line in lines[start:]:
        stripped = line.strip()

        if stripped.startswith("# ") and current_role is None:
            title = stripped[2:].strip()
        elif stripped.startswith("## "):
            flush()
            buffer = []
            current_role = parse_role(stripped[3:].strip())
        elif current_role is not None:
            buffer.append(line + "\n")
        # Anything before the first role header is dropped

    flush()

    if not messages:
        logger.debug("Document '%s' has no messages, skipping", title)
        return None

    return Conversation(
        id=str(uuid.uuid4()),
        title=title,
        messages=messages,
        created_at=created_at,
        updated_at=clock(),
        group=DEFAULT_GROUP,
    )


def parse_markdown(content: str, clock: Clock = datetime.now) -> list[Conversation]:
    """Parse Markdown text into conversations, one per document that has messages.

    Raises ConversionError if anything unexpected goes wrong.
    """
    try:
        documents = split_documents(content)
        conversations = [parse_document(doc, clock) for doc in documents]
    except Exception as e:
        raise ConversionError(f"Failed to parse Markdown: {e}", e) from e

    parsed = [conv for conv in conversations if conv is not None]
    logger.debug("Parsed %d of %d Markdown documents", len(parsed), len(documents))
    return parsed


class MarkdownConverter:
    """Converter for the MARKDOWN format."""

    supported_format = FormatTag.MARKDOWN

    def __init__(self, clock: Clock = datetime.now):
        self.clock = clock

    def convert(self, content: str) -> list[Conversation]:
        return parse_markdown(content, self.clock)
