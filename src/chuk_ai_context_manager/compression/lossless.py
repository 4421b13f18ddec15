# chuk_ai_context_manager/compression/lossless.py
"""
Reversible text encoding.

Two passes, applied in this order and undone in reverse:

1. run-length encoding of any character repeated 3+ times: ``aaaa`` -> ``a[4]``
2. substitution of common conversational phrases with sentinels: ``thank you`` -> ``§TY§``

Phrases are substituted only in their canonical casing so decoding restores
the text exactly; ``contains_common_phrase`` matches any casing. Other casings
such as ``Thank you`` stay uncompressed, so this encodes less than a
case-insensitive substitution would.
"""

from __future__ import annotations

import re

COMMON_PHRASES: dict[str, str] = {
    "I understand": "§IU§",
    "can you help": "§CYH§",
    "thank you": "§TY§",
    "let me know": "§LMK§",
    "by the way": "§BTW§",
}

RUN_PATTERN = re.compile(r"(.)\1{2,}")
RUN_MARKER_PATTERN = re.compile(r"(.)\[(\d+)\]")
LONG_RUN_PATTERN = re.compile(r"(.)\1{5,}")
COMMON_PHRASE_PATTERN = re.compile("|".join(re.escape(p) for p in COMMON_PHRASES), re.IGNORECASE)


def run_length_encode(text: str) -> str:
    return RUN_PATTERN.sub(lambda m: f"{m.group(1)}[{len(m.group(0))}]", text)


def run_length_decode(text: str) -> str:
    return RUN_MARKER_PATTERN.sub(lambda m: m.group(1) * int(m.group(2)), text)


def substitute_phrases(text: str) -> str:
    for phrase, sentinel in COMMON_PHRASES.items():
        text = text.replace(phrase, sentinel)
    return text


def restore_phrases(text: str) -> str:
    for phrase, sentinel in COMMON_PHRASES.items():
        text = text.replace(sentinel, phrase)
    return text


def encode(text: str) -> str:
    """Lossless encoding of ``text``."""
    return substitute_phrases(run_length_encode(text))


def decode(text: str) -> str:
    """Inverse of ``encode``."""
    return run_length_decode(restore_phrases(text))


def has_long_runs(text: str) -> bool:
    """True if some character repeats 6+ times in a row."""
    return LONG_RUN_PATTERN.search(text) is not None


def contains_common_phrase(text: str) -> bool:
    return COMMON_PHRASE_PATTERN.search(text) is not None


def generate_checksum(content: str) -> str:
    """
    32-bit rolling hash (``hash * 31 + code_unit``) over UTF-16 code units.

    Rendered like JavaScript's ``Number.prototype.toString(16)``, so
    negative hashes keep their sign: ``-1f``.
    """
    data = content.encode("utf-16-le")
    value = 0
    for i in range(0, len(data), 2):
        code_unit = data[i] | (data[i + 1] << 8)
        value = ((value << 5) - value + code_unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return format(value, "x")
