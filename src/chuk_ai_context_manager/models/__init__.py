# chuk_ai_context_manager/models/__init__.py
"""
Data models for the context manager.

Messages and documents come in from the chat flow; usage reports,
compression results and statistics go back out.
"""

from .compression import (
    CompressionEvent,
    CompressionHistory,
    CompressionOptions,
    CompressionResult,
    CompressionStatistics,
    CompressionStrategy,
    DailyCompressionBucket,
    EfficiencyReport,
    StrategyEfficiency,
    WeeklyCompressionBucket,
)
from .enums import (
    CompressionStrategyType,
    DocumentType,
    MessageRole,
    PruningStrategy,
    UsageWarningLevel,
)
from .message import DocumentContext, Message
from .model_limits import ModelLimits, ModelPricing
from .token_usage import (
    ContextUtilization,
    ConversationTokenStats,
    DetailedTokenUsage,
    TokenBreakdown,
    TokenCosts,
    TokenUsage,
)

__all__ = [
    # Enums
    "CompressionStrategyType",
    "DocumentType",
    "MessageRole",
    "PruningStrategy",
    "UsageWarningLevel",
    # Conversation
    "DocumentContext",
    "Message",
    # Limits
    "ModelLimits",
    "ModelPricing",
    # Usage
    "ContextUtilization",
    "ConversationTokenStats",
    "DetailedTokenUsage",
    "TokenBreakdown",
    "TokenCosts",
    "TokenUsage",
    # Compression
    "CompressionEvent",
    "CompressionHistory",
    "CompressionOptions",
    "CompressionResult",
    "CompressionStatistics",
    "CompressionStrategy",
    "DailyCompressionBucket",
    "EfficiencyReport",
    "StrategyEfficiency",
    "WeeklyCompressionBucket",
]
