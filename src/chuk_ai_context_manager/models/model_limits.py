# chuk_ai_context_manager/models/model_limits.py
"""Context window size and pricing for a model."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field


def _cost(tokens: int, price_per_1k: float) -> Decimal:
    # str() keeps the price as written (0.0025), not its binary approximation
    return Decimal(tokens) / 1000 * Decimal(str(price_per_1k))


class ModelPricing(BaseModel):
    """Price per 1K tokens. Costs are exact decimals; callers round them."""

    model_config = {"frozen": True}

    input: float = Field(default=0.0, ge=0)
    output: float = Field(default=0.0, ge=0)

    def input_cost(self, tokens: int) -> Decimal:
        return _cost(tokens, self.input)

    def output_cost(self, tokens: int) -> Decimal:
        return _cost(tokens, self.output)


class ModelLimits(BaseModel):
    """Static limits for one model."""

    model_config = {"frozen": True}

    context_window: int = Field(..., gt=0, description="Total budget for prompt, history and output")
    max_output: int = Field(..., gt=0, description="Cap on generated response length")
    pricing: ModelPricing = Field(default_factory=ModelPricing)
