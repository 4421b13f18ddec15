# chuk_ai_context_manager/exceptions.py
"""Exceptions raised by the context manager.

Most operations fall back to safe defaults instead of raising; these are
reserved for callers that explicitly ask for validation.
"""

from __future__ import annotations


class ContextManagerError(Exception):
    """Base class for context manager errors."""


class DecompressionError(ContextManagerError):
    """Restored content does not match what was compressed."""

    def __init__(self, message: str, expected_length: int | None = None, actual_length: int | None = None):
        super().__init__(message)
        self.expected_length = expected_length
        self.actual_length = actual_length
