# chuk_ai_context_manager/models/enums.py
"""Enums shared across the context manager."""

from __future__ import annotations

from enum import Enum


class MessageRole(str, Enum):
    """Message roles in a conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class DocumentType(str, Enum):
    """File types accepted as retrieval context."""

    PDF = "pdf"
    DOCX = "docx"
    TXT = "txt"
    MD = "md"
    CSV = "csv"
    JSON = "json"
    XML = "xml"


class PruningStrategy(str, Enum):
    """How the context selector had to shrink the history."""

    NONE = "none"  # Everything fits
    OLDEST_FIRST = "oldest_first"  # Older messages evicted, budget filled exactly
    COMPRESSION_NEEDED = "compression_needed"  # Evicted with headroom left over
    EMERGENCY = "emergency"  # Even the newest messages do not fit


class CompressionStrategyType(str, Enum):
    """Compression strategies, from most to least faithful."""

    LOSSLESS = "lossless"
    SEMANTIC = "semantic"
    SUMMARY = "summary"
    HYBRID = "hybrid"


class UsageWarningLevel(str, Enum):
    """Context usage bands shown to the user."""

    NONE = "none"
    NOTICE = "notice"  # >= 60%
    WARNING = "warning"  # >= 80%
    CRITICAL = "critical"  # >= 95%

    @classmethod
    def from_percentage(cls, percentage: float) -> UsageWarningLevel:
        """Band a usage percentage."""
        if percentage >= 95:
            return cls.CRITICAL
        if percentage >= 80:
            return cls.WARNING
        if percentage >= 60:
            return cls.NOTICE
        return cls.NONE
