"""Data models for imported conversations."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class Sender(str, Enum):
    USER = "user"
    AI = "ai"


class FormatTag(str, Enum):
    """Chat export dialects the detector can tell apart."""

    MARKDOWN = "markdown"
    CSV = "csv"
    CHATGPT = "chatgpt"
    OPERIT = "operit"
    CLAUDE = "claude"
    GENERIC_JSON = "generic_json"
    PLAIN_TEXT = "plain_text"
    UNKNOWN = "unknown"


class Message(BaseModel):
    sender: Sender
    content: str
    timestamp: int  # epoch milliseconds
    provider: str = ""
    model_name: str = ""


class Conversation(BaseModel):
    id: str
    title: str
    messages: list[Message] = []
    created_at: datetime
    updated_at: datetime
    group: str | None = None

    @property
    def message_count(self) -> int:
        return len(self.messages)
