# chuk_ai_context_manager/usage.py
"""
Token usage accounting.

Combines the token estimator with the model limits table to report how much
of a model's context window a pending turn would use:

- system prompt, conversation history, attached documents and pending input
- cumulative input vs output tokens and a reservation for the reply
- projected cost from the model's per-1K pricing
- per-conversation aggregates

Usage::

    from chuk_ai_context_manager.usage import calculate_detailed_token_usage

    usage = calculate_detailed_token_usage(
        system_prompt="You are a helpful assistant.",
        messages=history,
        documents=uploads,
        pending_input=draft,
        model_id="gpt-4o-mini",
    )
    if usage.warning_level is UsageWarningLevel.CRITICAL:
        ...
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal

from chuk_ai_context_manager.model_limits import get_model_limits, resolve_model_id
from chuk_ai_context_manager.models.enums import CompressionStrategyType, MessageRole, UsageWarningLevel
from chuk_ai_context_manager.models.message import DocumentContext, Message
from chuk_ai_context_manager.models.model_limits import ModelLimits
from chuk_ai_context_manager.models.token_usage import (
    ContextUtilization,
    ConversationTokenStats,
    DetailedTokenUsage,
    TokenBreakdown,
    TokenCosts,
    TokenUsage,
)
from chuk_ai_context_manager.token_estimator import estimate_token_count

COST_QUANTUM = Decimal("0.0001")
EXPECTED_OUTPUT_MULTIPLIER = 2

# =============================================================================
# Helpers
# =============================================================================


def _round_half_up(value: float) -> int:
    """Round halves away from zero for non-negative values (not banker's rounding)."""
    return math.floor(value + 0.5)


def _percent_of(tokens: int, context_window: int) -> int:
    return _round_half_up(tokens / context_window * 100)


def _round_cost(value: Decimal) -> float:
    return float(value.quantize(COST_QUANTUM, rounding=ROUND_HALF_UP))


def _costs(limits: ModelLimits, input_tokens: int, output_tokens: int) -> TokenCosts:
    """Costs rounded half up to 4 decimals, computed in decimal so halves are exact."""
    input_cost = limits.pricing.input_cost(input_tokens)
    output_cost = limits.pricing.output_cost(output_tokens)
    return TokenCosts(
        input_cost=_round_cost(input_cost),
        output_cost=_round_cost(output_cost),
        total_cost=_round_cost(input_cost + output_cost),
    )


def _sum_by_role(messages: Iterable[Message]) -> tuple[int, int]:
    """(user tokens, assistant tokens). System messages are not counted."""
    input_tokens = 0
    output_tokens = 0
    for message in messages:
        if message.role == MessageRole.USER:
            input_tokens += estimate_token_count(message.content)
        elif message.role == MessageRole.ASSISTANT:
            output_tokens += estimate_token_count(message.content)
    return input_tokens, output_tokens


def document_tokens(documents: Iterable[DocumentContext] | None) -> int:
    """Tokens of all attached documents, using their ingestion-time counts."""
    if not documents:
        return 0
    return sum(doc.effective_token_count() for doc in documents)


def _usage_fields(
    system_tokens: int,
    history_tokens: int,
    rag_tokens: int,
    current_tokens: int,
    context_window: int,
) -> dict[str, int]:
    total = system_tokens + history_tokens + rag_tokens + current_tokens
    return {
        "system_prompt": system_tokens,
        "conversation_history": history_tokens,
        "rag_context": rag_tokens,
        "current_message": current_tokens,
        "total": total,
        "remaining": max(0, context_window - total),
        "percentage": min(100, _percent_of(total, context_window)),
        "context_window": context_window,
    }


# =============================================================================
# Calculators
# =============================================================================


def calculate_detailed_token_usage(
    system_prompt: str | None,
    messages: Sequence[Message],
    documents: Sequence[DocumentContext] | None = None,
    pending_input: str | None = "",
    model_id: str | None = None,
) -> DetailedTokenUsage:
    """
    Full usage report for the next turn.

    ``model`` is the resolved table entry, so an unknown id reports the
    fallback model it was priced against. ``expected_output_tokens`` is
    reported in the breakdown but is not part of ``total`` or ``percentage``.
    """
    resolved_model = resolve_model_id(model_id)
    limits = get_model_limits(resolved_model)
    context_window = limits.context_window

    system_tokens = estimate_token_count(system_prompt)
    input_tokens, output_tokens = _sum_by_role(messages)
    rag_tokens = document_tokens(documents)
    current_tokens = estimate_token_count(pending_input)
    expected_output = min(current_tokens * EXPECTED_OUTPUT_MULTIPLIER, limits.max_output)

    fields = _usage_fields(
        system_tokens,
        input_tokens + output_tokens,
        rag_tokens,
        current_tokens,
        context_window,
    )
    total = fields["total"]

    return DetailedTokenUsage(
        **fields,
        model=resolved_model,
        breakdown=TokenBreakdown(
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            rag_tokens=rag_tokens,
            current_input_tokens=current_tokens,
            expected_output_tokens=expected_output,
        ),
        costs=_costs(
            limits,
            system_tokens + input_tokens + current_tokens + rag_tokens,
            output_tokens,
        ),
        context_utilization=ContextUtilization(
            history_percentage=_percent_of(input_tokens + output_tokens, context_window),
            rag_percentage=_percent_of(rag_tokens, context_window),
            system_percentage=_percent_of(system_tokens, context_window),
            available_for_response=context_window - total,
        ),
    )


def calculate_token_usage(
    system_prompt: str | None,
    conversation_history: str | None,
    pending_input: str | None = "",
    model_id: str | None = None,
    documents: Sequence[DocumentContext] | None = None,
) -> TokenUsage:
    """Usage for callers that only have the history as one joined string."""
    limits = get_model_limits(model_id)
    fields = _usage_fields(
        estimate_token_count(system_prompt),
        estimate_token_count(conversation_history),
        document_tokens(documents),
        estimate_token_count(pending_input),
        limits.context_window,
    )
    return TokenUsage(**fields)


def get_conversation_token_stats(
    messages: Sequence[Message],
    model_id: str | None = None,
) -> ConversationTokenStats:
    """Cumulative token and cost metrics for one conversation."""
    limits = get_model_limits(model_id)

    total_input = 0
    total_output = 0
    user_count = 0
    assistant_count = 0
    longest = 0
    shortest = math.inf

    for message in messages:
        tokens = estimate_token_count(message.content)
        if message.role == MessageRole.USER:
            total_input += tokens
            user_count += 1
        elif message.role == MessageRole.ASSISTANT:
            total_output += tokens
            assistant_count += 1
        longest = max(longest, tokens)
        shortest = min(shortest, tokens)

    return ConversationTokenStats(
        total_messages=len(messages),
        total_input_tokens=total_input,
        total_output_tokens=total_output,
        total_tokens=total_input + total_output,
        average_input_tokens=total_input / max(1, user_count),
        average_output_tokens=total_output / max(1, assistant_count),
        longest_message=longest,
        shortest_message=0 if shortest == math.inf else int(shortest),
        cumulative_cost=_costs(limits, total_input, total_output).total_cost,
    )


# =============================================================================
# Warning bands
# =============================================================================


def get_warning_level(percentage: float) -> UsageWarningLevel:
    """Notice from 60%, warning from 80%, critical from 95%."""
    return UsageWarningLevel.from_percentage(percentage)


def strategy_for_utilization(percentage: float) -> CompressionStrategyType:
    """Quick-compress choice driven only by how full the window is."""
    if percentage >= 85:
        return CompressionStrategyType.SUMMARY
    if percentage >= 70:
        return CompressionStrategyType.SEMANTIC
    return CompressionStrategyType.LOSSLESS
