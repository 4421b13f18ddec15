# chuk_ai_context_manager/model_limits.py
"""
Model limits table.

Maps the model identifiers offered in the chat UI to context window size,
output cap and per-1K-token pricing. Lookups never fail: unknown ids get the
fallback model's limits.
"""

from __future__ import annotations

import logging

from chuk_ai_context_manager.config import DEFAULT_TOKEN_MODEL, FALLBACK_MODEL
from chuk_ai_context_manager.models.model_limits import ModelLimits, ModelPricing

logger = logging.getLogger(__name__)


def _limits(context_window: int, max_output: int, input_price: float, output_price: float) -> ModelLimits:
    return ModelLimits(
        context_window=context_window,
        max_output=max_output,
        pricing=ModelPricing(input=input_price, output=output_price),
    )


MODEL_LIMITS: dict[str, ModelLimits] = {
    # OpenAI
    "gpt-4o": _limits(128_000, 16_384, 0.0025, 0.01),
    "gpt-4o-mini": _limits(128_000, 16_384, 0.00015, 0.0006),
    "gpt-3.5-turbo": _limits(16_385, 4_096, 0.0005, 0.0015),
    # Google
    "gemini-2.0-flash": _limits(1_048_576, 8_192, 0.0001, 0.0004),
    "gemini-1.5-pro": _limits(2_097_152, 8_192, 0.00125, 0.005),
    "gemini-1.5-flash": _limits(1_048_576, 8_192, 0.000075, 0.0003),
    # Anthropic
    "claude-3.7-sonnet": _limits(200_000, 8_192, 0.003, 0.015),
    "claude-3.5-sonnet": _limits(200_000, 8_192, 0.003, 0.015),
    "claude-3.5-haiku": _limits(200_000, 8_192, 0.0008, 0.004),
    # Local models (no per-token cost)
    "llama4-scout": _limits(131_072, 8_192, 0.0, 0.0),
    "llama3.2:3b": _limits(128_000, 4_096, 0.0, 0.0),
    "llama3.1:8b": _limits(128_000, 4_096, 0.0, 0.0),
    "mistral-7b": _limits(32_768, 4_096, 0.0, 0.0),
    "phi-3": _limits(4_096, 2_048, 0.0, 0.0),
}


def is_known_model(model_id: str | None) -> bool:
    return model_id in MODEL_LIMITS


def resolve_model_id(model_id: str | None = None) -> str:
    """
    The table entry that ``model_id`` is priced against.

    ``None`` means the configured default model. Anything not in the table
    resolves to the fallback model.
    """
    if model_id is None:
        model_id = DEFAULT_TOKEN_MODEL
    if model_id in MODEL_LIMITS:
        return model_id
    logger.debug("Unknown model %r, using %s limits", model_id, FALLBACK_MODEL)
    return FALLBACK_MODEL


def get_model_limits(model_id: str | None = None) -> ModelLimits:
    """Limits for ``model_id``, resolved as in ``resolve_model_id``."""
    return MODEL_LIMITS[resolve_model_id(model_id)]
