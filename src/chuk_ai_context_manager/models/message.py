# chuk_ai_context_manager/models/message.py
"""Conversation messages and retrieval documents."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

from chuk_ai_context_manager.models.enums import DocumentType, MessageRole
from chuk_ai_context_manager.token_estimator import estimate_token_count


def _assume_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class Message(BaseModel):
    """A chat message as the chat flow hands it over.

    ``content`` may be overwritten by the caller with a compressed form.
    ``tokens`` is informational; calculations always estimate from content.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    role: MessageRole
    content: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    tokens: int | None = None

    @field_validator("timestamp")
    @classmethod
    def timestamp_as_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)

    @property
    def is_conversation_turn(self) -> bool:
        """User and assistant messages count towards history; system ones do not."""
        return self.role in (MessageRole.USER, MessageRole.ASSISTANT)


class DocumentContext(BaseModel):
    """A document attached to the conversation for retrieval."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    type: DocumentType = DocumentType.TXT
    content: str = ""
    token_count: int | None = Field(default=None, description="Estimated once at ingestion")
    size: int = Field(default=0, description="Size in bytes")
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("uploaded_at")
    @classmethod
    def uploaded_at_as_utc(cls, v: datetime) -> datetime:
        return _assume_utc(v)

    @classmethod
    def create(
        cls,
        name: str,
        content: str,
        type: DocumentType | str = DocumentType.TXT,
    ) -> DocumentContext:
        """Ingest a document, computing its token count and byte size."""
        return cls(
            name=name,
            type=DocumentType(type),
            content=content,
            token_count=estimate_token_count(content),
            size=len(content.encode("utf-8")),
        )

    def effective_token_count(self) -> int:
        """The ingestion-time count, or a fresh estimate if none was stored."""
        if self.token_count is not None:
            return self.token_count
        return estimate_token_count(self.content)
