# chuk_ai_context_manager/context_selector.py
"""
Context selection under a token budget.

Decides which messages of a conversation are sent verbatim and which are
dropped so that system prompt, attached documents and history stay within a
share of the model's context window.

The policy is greedy and recency biased:
- the newest ``guaranteed_recent`` messages are always kept, unless they
  alone overflow the budget (EMERGENCY)
- older messages are added newest first until the next one would overflow
- kept messages are returned in chronological order

Usage::

    from chuk_ai_context_manager.context_selector import select_optimal_context

    selection = select_optimal_context(messages, system_prompt, documents, "gpt-4o")
    if selection.pruning_strategy is PruningStrategy.COMPRESSION_NEEDED:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from chuk_ai_context_manager.base_models import DictCompatModel
from chuk_ai_context_manager.config import MAX_CONTEXT_PERCENTAGE
from chuk_ai_context_manager.model_limits import get_model_limits
from chuk_ai_context_manager.models.enums import PruningStrategy
from chuk_ai_context_manager.models.message import DocumentContext, Message
from chuk_ai_context_manager.token_estimator import estimate_token_count
from chuk_ai_context_manager.usage import document_tokens

logger = logging.getLogger(__name__)

# =============================================================================
# Models
# =============================================================================


class ContextSelectorConfig(BaseModel):
    """Configuration for context selection."""

    guaranteed_recent: int = Field(default=4, ge=0, description="Newest messages always kept")


class ContextTokenStats(DictCompatModel):
    """Token totals of a selection."""

    total: int = Field(default=0, description="Included conversation + system + rag")
    system: int = 0
    rag: int = 0
    conversation: int = Field(default=0, description="Tokens of included messages")
    available: int = Field(default=0, description="Budget left after the selection")


class ContextSelection(DictCompatModel):
    """Result of selecting context for a request."""

    included_messages: list[Message] = Field(default_factory=list)
    excluded_messages: list[Message] = Field(default_factory=list)
    token_stats: ContextTokenStats = Field(default_factory=ContextTokenStats)
    pruning_strategy: PruningStrategy = PruningStrategy.NONE


# =============================================================================
# Selection
# =============================================================================


def _identity(message: Message) -> tuple[str, datetime]:
    return (message.content, message.timestamp)


def select_optimal_context(
    messages: Sequence[Message],
    system_prompt: str | None = "",
    documents: Sequence[DocumentContext] | None = None,
    model_id: str | None = None,
    max_context_percentage: int = MAX_CONTEXT_PERCENTAGE,
    config: ContextSelectorConfig | None = None,
) -> ContextSelection:
    """Pick the messages to send so the request stays within budget."""
    cfg = config or ContextSelectorConfig()
    limits = get_model_limits(model_id)

    max_allowed = limits.context_window * max_context_percentage // 100
    system_tokens = estimate_token_count(system_prompt)
    rag_tokens = document_tokens(documents)
    fixed_tokens = system_tokens + rag_tokens
    available_for_conversation = max_allowed - fixed_tokens

    # Python's sort is stable with reverse=True, so equal timestamps keep input order
    newest_first = sorted(messages, key=lambda m: m.timestamp, reverse=True)
    guaranteed = newest_first[: cfg.guaranteed_recent]
    remaining = newest_first[cfg.guaranteed_recent :]

    token_cache = {id(m): estimate_token_count(m.content) for m in newest_first}
    guaranteed_tokens = sum(token_cache[id(m)] for m in guaranteed)

    included: list[Message] = []
    conversation_tokens = 0
    strategy = PruningStrategy.NONE

    if guaranteed_tokens + fixed_tokens > max_allowed:
        strategy = PruningStrategy.EMERGENCY
        for message in guaranteed:
            tokens = token_cache[id(message)]
            if conversation_tokens + tokens + fixed_tokens > max_allowed:
                break
            included.append(message)
            conversation_tokens += tokens
        logger.info(
            "Newest %d messages need %d tokens with only %d allowed; kept %d",
            len(guaranteed),
            guaranteed_tokens + fixed_tokens,
            max_allowed,
            len(included),
        )
    else:
        included.extend(guaranteed)
        conversation_tokens = guaranteed_tokens
        for message in remaining:
            tokens = token_cache[id(message)]
            if conversation_tokens + tokens > available_for_conversation:
                strategy = PruningStrategy.OLDEST_FIRST
                break
            included.append(message)
            conversation_tokens += tokens

    included.sort(key=lambda m: m.timestamp)

    kept = {_identity(m) for m in included}
    excluded = [m for m in messages if _identity(m) not in kept]

    if not excluded:
        strategy = PruningStrategy.NONE
    elif strategy == PruningStrategy.OLDEST_FIRST and conversation_tokens < available_for_conversation:
        strategy = PruningStrategy.COMPRESSION_NEEDED

    total = conversation_tokens + fixed_tokens
    logger.debug(
        "Selected %d/%d messages (%d tokens, strategy=%s)",
        len(included),
        len(messages),
        total,
        strategy.value,
    )

    return ContextSelection(
        included_messages=included,
        excluded_messages=excluded,
        token_stats=ContextTokenStats(
            total=total,
            system=system_tokens,
            rag=rag_tokens,
            conversation=conversation_tokens,
            available=max_allowed - total,
        ),
        pruning_strategy=strategy,
    )
