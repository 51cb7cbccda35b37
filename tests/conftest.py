"""Shared pytest fixtures for chatport tests."""

from datetime import datetime

import pytest

from chatport.models import Conversation, Message, Sender

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def clock(now):
    """A clock that always returns the fixed 'now'."""
    return lambda: now


@pytest.fixture
def sample_conversation():
    """A two-message conversation with a group and a real model name."""
    return Conversation(
        id="conv-1",
        title="Python questions",
        messages=[
            Message(sender=Sender.USER, content="What is a generator?", timestamp=1000),
            Message(
                sender=Sender.AI,
                content="A function that yields values lazily.\n\nUse `yield`.",
                timestamp=1100,
                provider="OpenAI",
                model_name="gpt-4o",
            ),
        ],
        created_at=datetime(2024, 1, 15, 10, 30, 0),
        updated_at=datetime(2024, 1, 15, 11, 0, 0),
        group="Programming",
    )


@pytest.fixture
def markdown_sample():
    """Markdown with front matter, an H1 title and two role headers."""
    return "---\ntitle: Demo\n---\n# Demo\n## 👤 User\nHi\n## 🤖 AI\nHello"
