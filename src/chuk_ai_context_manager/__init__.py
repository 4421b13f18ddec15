# chuk_ai_context_manager/__init__.py
"""
Context window management for chat conversations.

Quick start::

    from chuk_ai_context_manager import (
        CompressionEngine,
        Message,
        calculate_detailed_token_usage,
        select_optimal_context,
    )

    usage = calculate_detailed_token_usage(system_prompt, messages, documents, draft, "gpt-4o")
    if usage.percentage >= 80:
        selection = select_optimal_context(messages, system_prompt, documents, "gpt-4o")
        engine = CompressionEngine()
        strategy = engine.analyze_and_recommend_strategy(selection.excluded_messages, usage.total)
        result = engine.compress_with_strategy(strategy, selection.excluded_messages, "conv-1")
"""

from chuk_ai_context_manager.compression import CompressionEngine, create_compression_engine
from chuk_ai_context_manager.context_selector import (
    ContextSelection,
    ContextSelectorConfig,
    ContextTokenStats,
    select_optimal_context,
)
from chuk_ai_context_manager.exceptions import ContextManagerError, DecompressionError
from chuk_ai_context_manager.model_limits import MODEL_LIMITS, get_model_limits, is_known_model, resolve_model_id
from chuk_ai_context_manager.models import (
    CompressionEvent,
    CompressionOptions,
    CompressionResult,
    CompressionStatistics,
    CompressionStrategy,
    CompressionStrategyType,
    ConversationTokenStats,
    DetailedTokenUsage,
    DocumentContext,
    DocumentType,
    EfficiencyReport,
    Message,
    MessageRole,
    ModelLimits,
    ModelPricing,
    PruningStrategy,
    TokenUsage,
    UsageWarningLevel,
)
from chuk_ai_context_manager.token_estimator import estimate_messages_tokens, estimate_token_count
from chuk_ai_context_manager.usage import (
    calculate_detailed_token_usage,
    calculate_token_usage,
    get_conversation_token_stats,
    get_warning_level,
    strategy_for_utilization,
)

__version__ = "0.1.0"

__all__ = [
    # Estimation
    "estimate_token_count",
    "estimate_messages_tokens",
    # Limits
    "MODEL_LIMITS",
    "ModelLimits",
    "ModelPricing",
    "get_model_limits",
    "is_known_model",
    "resolve_model_id",
    # Conversation
    "DocumentContext",
    "DocumentType",
    "Message",
    "MessageRole",
    # Usage
    "ConversationTokenStats",
    "DetailedTokenUsage",
    "TokenUsage",
    "UsageWarningLevel",
    "calculate_detailed_token_usage",
    "calculate_token_usage",
    "get_conversation_token_stats",
    "get_warning_level",
    "strategy_for_utilization",
    # Selection
    "ContextSelection",
    "ContextSelectorConfig",
    "ContextTokenStats",
    "PruningStrategy",
    "select_optimal_context",
    # Compression
    "CompressionEngine",
    "CompressionEvent",
    "CompressionOptions",
    "CompressionResult",
    "CompressionStatistics",
    "CompressionStrategy",
    "CompressionStrategyType",
    "EfficiencyReport",
    "create_compression_engine",
    # Errors
    "ContextManagerError",
    "DecompressionError",
]
