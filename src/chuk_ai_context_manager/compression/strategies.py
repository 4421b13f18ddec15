# chuk_ai_context_manager/compression/strategies.py
"""Text transforms behind the lossy strategies (semantic, summary, hybrid)."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from chuk_ai_context_manager.models.message import Message

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")

DEFAULT_PRESERVE_RATIO = 0.7
MAX_KEY_POINTS = 5
KEY_POINT_FALLBACK_CHARS = 100
RECENT_MESSAGE_COUNT = 3


def split_sentences(text: str) -> list[str]:
    """Fragments between runs of ``.!?``, dropping blank ones. Whitespace is kept."""
    return [s for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def prune_sentences(text: str, preserve_ratio: float = DEFAULT_PRESERVE_RATIO) -> str:
    """Keep the leading ``ceil(n * preserve_ratio)`` sentences."""
    sentences = split_sentences(text)
    kept = sentences[: math.ceil(len(sentences) * preserve_ratio)]
    return ". ".join(kept) + "."


def extract_key_points(messages: Sequence[Message], limit: int = MAX_KEY_POINTS) -> list[str]:
    """First sentence of each message, deduplicated in order, at most ``limit``."""
    points: list[str] = []
    for message in messages:
        sentences = split_sentences(message.content)
        points.append(sentences[0] if sentences else message.content[:KEY_POINT_FALLBACK_CHARS])
    return list(dict.fromkeys(points))[:limit]


def format_summary(points: Sequence[str]) -> str:
    return f"[SUMMARY] Key points: {'; '.join(points)}"


def split_recent(
    messages: Sequence[Message],
    recent_count: int = RECENT_MESSAGE_COUNT,
) -> tuple[list[Message], list[Message]]:
    """(older, recent) where recent is the last ``recent_count`` messages."""
    if len(messages) <= recent_count:
        return [], list(messages)
    return list(messages[:-recent_count]), list(messages[-recent_count:])


def format_transcript(messages: Sequence[Message]) -> str:
    """``role: content`` lines."""
    return "\n".join(f"{m.role.value}: {m.content}" for m in messages)


def join_contents(messages: Sequence[Message]) -> str:
    return " ".join(m.content for m in messages)
