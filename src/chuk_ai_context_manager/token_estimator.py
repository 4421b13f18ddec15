# chuk_ai_context_manager/token_estimator.py
"""
Heuristic token estimation.

Blends a word-based and a character-based estimate. Text that looks
structured (code, JSON, CSV, markup) leans on the character estimate, prose
leans on the word estimate. The numbers only need to be consistent with
each other; they are not meant to match any vendor tokenizer.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chuk_ai_context_manager.models.message import Message

TOKENS_PER_WORD = 1.3
CHARS_PER_TOKEN = 4
MIN_TOKENS_PER_WORD = 0.75

STRUCTURED_CHARS = frozenset("{}[](),:;|<>")

# (word weight, char weight)
PROSE_WEIGHTS = (0.7, 0.3)
STRUCTURED_WEIGHTS = (0.3, 0.7)


def is_structured(text: str) -> bool:
    """True if the text contains any bracket, separator or markup character."""
    return any(ch in STRUCTURED_CHARS for ch in text)


def estimate_token_count(text: str | None) -> int:
    """
    Estimate the number of tokens in ``text``.

    >>> estimate_token_count("hello world")
    3
    """
    if not text or not text.strip():
        return 0

    word_count = len(text.split())
    char_count = len(text)

    word_based = word_count * TOKENS_PER_WORD
    char_based = char_count / CHARS_PER_TOKEN

    word_weight, char_weight = STRUCTURED_WEIGHTS if is_structured(text) else PROSE_WEIGHTS
    weighted = word_based * word_weight + char_based * char_weight

    return max(math.ceil(weighted), math.ceil(word_count * MIN_TOKENS_PER_WORD))


def estimate_messages_tokens(messages: Iterable[Message]) -> int:
    """Sum of per-message estimates."""
    return sum(estimate_token_count(m.content) for m in messages)
