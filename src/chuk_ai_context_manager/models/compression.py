# chuk_ai_context_manager/models/compression.py
"""Compression strategies, results, events and statistics models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from chuk_ai_context_manager.base_models import DictCompatModel
from chuk_ai_context_manager.models.enums import CompressionStrategyType

# =============================================================================
# Strategy
# =============================================================================


class CompressionOptions(BaseModel):
    """Tuning knobs for a strategy. Unset options use the strategy default."""

    preserve_ratio: float | None = Field(default=None, gt=0, le=1)
    summary_length: int | None = Field(default=None, gt=0)
    include_checksum: bool | None = None


class CompressionStrategy(DictCompatModel):
    """A strategy together with its options."""

    type: CompressionStrategyType
    options: CompressionOptions | None = None

    @property
    def preserve_ratio(self) -> float | None:
        return self.options.preserve_ratio if self.options else None

    @property
    def include_checksum(self) -> bool:
        return bool(self.options and self.options.include_checksum)


# =============================================================================
# Results and events
# =============================================================================


class CompressionResult(DictCompatModel):
    """
    Compressed text tagged with the strategy that produced it.

    Carrying the strategy and original length lets ``decompress`` validate
    the restored text instead of trusting the caller.
    """

    strategy: CompressionStrategyType
    compressed: str
    ratio: float = Field(..., description="Compressed length / original length, in characters")
    original_length: int = Field(default=0, ge=0)
    accuracy: float = Field(default=1.0, ge=0, le=1)
    checksum: str | None = Field(default=None, description="Checksum of the original text")
    event_id: str | None = None

    @property
    def reversible(self) -> bool:
        return self.strategy == CompressionStrategyType.LOSSLESS


class CompressionEvent(BaseModel):
    """One recorded compression. Never mutated after creation."""

    model_config = {"frozen": True}

    id: str
    timestamp: datetime
    strategy: CompressionStrategyType
    original_tokens: int
    compressed_tokens: int
    ratio: float
    accuracy: float
    conversation_id: str = "unknown"
    message_count: int = 1

    @property
    def tokens_saved(self) -> int:
        return self.original_tokens - self.compressed_tokens


# =============================================================================
# Statistics
# =============================================================================


class DailyCompressionBucket(BaseModel):
    date: str
    compressions: int = 0
    tokens_saved: int = 0


class WeeklyCompressionBucket(BaseModel):
    week: str
    compressions: int = 0
    tokens_saved: int = 0


class CompressionHistory(BaseModel):
    """Trend buckets: 7 days and 4 weeks, oldest first."""

    daily: list[DailyCompressionBucket] = Field(default_factory=list)
    weekly: list[WeeklyCompressionBucket] = Field(default_factory=list)


class CompressionStatistics(DictCompatModel):
    """Statistics derived from an engine's event log."""

    total_compressions: int = 0
    compressions_by_type: dict[str, int] = Field(default_factory=dict)
    average_compression_ratio: float = 1.0
    total_tokens_saved: int = 0
    lossless_percentage: float = 0.0
    average_accuracy: float = 1.0
    most_effective_strategy: str = CompressionStrategyType.LOSSLESS.value
    recent_compressions: list[CompressionEvent] = Field(default_factory=list)
    compression_history: CompressionHistory = Field(default_factory=CompressionHistory)


class StrategyEfficiency(BaseModel):
    strategy: str
    count: int = 0
    tokens_saved: int = 0
    avg_ratio: float = 0.0


class EfficiencyReport(DictCompatModel):
    """Dashboard summary of compression effectiveness per strategy."""

    total_tokens_saved: int = 0
    average_compression_ratio: float = 1.0
    lossless_percentage: float = 0.0
    compressions_by_strategy: list[StrategyEfficiency] = Field(default_factory=list)
