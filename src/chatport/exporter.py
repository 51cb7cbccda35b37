"""Render conversations as Markdown that the parser can read back."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from .config import EXPORT_HEADING, HIDDEN_MODEL_NAMES
from .dates import format_date
from .models import Conversation, Message, Sender


def _format_message(message: Message) -> list[str]:
    if message.sender == Sender.USER:
        header = "## 👤 User"
    else:
        header = "## 🤖 Assistant"

    lines = [header, ""]
    if message.model_name and message.model_name not in HIDDEN_MODEL_NAMES:
        lines += [f"*Model: {message.model_name}*", ""]
    lines += [message.content, ""]
    return lines


def export_conversation(conv: Conversation) -> str:
    """Export a single conversation: front matter, title, metadata, messages."""
    created = format_date(conv.created_at)
    updated = format_date(conv.updated_at)

    lines = ["---", f"title: {conv.title}", f"created: {created}", f"updated: {updated}"]
    if conv.group is not None:
        lines.append(f"group: {conv.group}")
    lines += [f"messages: {conv.message_count}", "---", ""]

    lines += [f"# {conv.title}", ""]
    lines += [f"**Created:** {created}", f"**Updated:** {updated}"]
    if conv.group is not None:
        lines.append(f"**Group:** {conv.group}")
    lines += ["", "---", ""]

    for message in conv.messages:
        lines += _format_message(message)

    return "\n".join(lines) + "\n"


def export_conversations(
    conversations: list[Conversation],
    clock: Callable[[], datetime] = datetime.now,
) -> str:
    """Export several conversations into one Markdown file."""
    total_messages = sum(conv.message_count for conv in conversations)

    parts = [
        "\n".join([
            f"# {EXPORT_HEADING}",
            "",
            f"**Exported:** {format_date(clock())}",
            f"**Conversations:** {len(conversations)}",
            f"**Total messages:** {total_messages}",
            "",
            "---",
            "",
        ])
        + "\n"
    ]

    for i, conv in enumerate(conversations):
        if i > 0:
            parts.append("\n---\n\n")
        parts.append(export_conversation(conv))

    return "".join(parts)
