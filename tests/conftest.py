# tests/conftest.py
"""
Shared pytest fixtures and configuration for chuk_ai_context_manager tests.
"""

import logging
from datetime import UTC, datetime, timedelta

import pytest

from chuk_ai_context_manager.compression.engine import CompressionEngine
from chuk_ai_context_manager.models import Message, MessageRole

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("chuk_ai_context_manager").setLevel(logging.DEBUG)

BASE_TIME = datetime(2024, 1, 10, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def build_messages(contents, start: datetime = BASE_TIME, roles=None) -> list[Message]:
    """Messages one minute apart, alternating user/assistant unless roles are given."""
    messages = []
    for i, content in enumerate(contents):
        if roles is not None:
            role = roles[i]
        else:
            role = MessageRole.USER if i % 2 == 0 else MessageRole.ASSISTANT
        messages.append(Message(role=role, content=content, timestamp=start + timedelta(minutes=i)))
    return messages


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(clock):
    """A fresh engine with a pinned clock."""
    return CompressionEngine(clock=clock)


@pytest.fixture
def make_messages():
    return build_messages
