# chuk_ai_context_manager/models/token_usage.py
"""Token usage reports."""

from __future__ import annotations

from pydantic import Field

from chuk_ai_context_manager.base_models import DictCompatModel
from chuk_ai_context_manager.models.enums import UsageWarningLevel


class TokenBreakdown(DictCompatModel):
    """Finer split of where tokens come from."""

    input_tokens: int = Field(default=0, description="Cumulative user message tokens")
    output_tokens: int = Field(default=0, description="Cumulative assistant message tokens")
    rag_tokens: int = Field(default=0, description="Attached document tokens")
    current_input_tokens: int = Field(default=0, description="Pending user input tokens")
    expected_output_tokens: int = Field(default=0, description="Reserved for the reply, not part of total")


class TokenCosts(DictCompatModel):
    """Projected cost, rounded to 4 decimals."""

    input_cost: float = 0.0
    output_cost: float = 0.0
    total_cost: float = 0.0


class ContextUtilization(DictCompatModel):
    """Share of the context window taken by each source, in whole percent."""

    history_percentage: int = 0
    rag_percentage: int = 0
    system_percentage: int = 0
    available_for_response: int = 0


class TokenUsage(DictCompatModel):
    """Usage of the context window for one pending turn."""

    system_prompt: int = 0
    conversation_history: int = 0
    rag_context: int = 0
    current_message: int = 0
    total: int = 0
    remaining: int = 0
    percentage: int = Field(default=0, ge=0, le=100)
    context_window: int = 0

    @property
    def warning_level(self) -> UsageWarningLevel:
        return UsageWarningLevel.from_percentage(self.percentage)

    @property
    def is_over_limit(self) -> bool:
        return self.total > self.context_window


class DetailedTokenUsage(TokenUsage):
    """Usage report with breakdown, costs and utilization."""

    model: str = Field(default="", description="Table entry the report was priced against")
    breakdown: TokenBreakdown = Field(default_factory=TokenBreakdown)
    costs: TokenCosts = Field(default_factory=TokenCosts)
    context_utilization: ContextUtilization = Field(default_factory=ContextUtilization)


class ConversationTokenStats(DictCompatModel):
    """Cumulative metrics over every message of one conversation."""

    total_messages: int = 0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_tokens: int = 0
    average_input_tokens: float = 0.0
    average_output_tokens: float = 0.0
    longest_message: int = 0
    shortest_message: int = 0
    cumulative_cost: float = 0.0
