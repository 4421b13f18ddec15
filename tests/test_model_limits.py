# tests/test_model_limits.py
"""Tests for the model limits table and its fallback behaviour."""

from decimal import Decimal

import pytest

from chuk_ai_context_manager.config import DEFAULT_TOKEN_MODEL, FALLBACK_MODEL
from chuk_ai_context_manager.model_limits import MODEL_LIMITS, get_model_limits, is_known_model, resolve_model_id
from chuk_ai_context_manager.models import ModelLimits


class TestLookup:
    def test_known_model(self):
        limits = get_model_limits("gpt-4o")
        assert limits.context_window == 128_000
        assert limits.pricing.input == pytest.approx(0.0025)
        assert limits.pricing.output == pytest.approx(0.01)

    def test_every_entry_is_usable(self):
        for model_id, limits in MODEL_LIMITS.items():
            assert isinstance(limits, ModelLimits), model_id
            assert limits.max_output <= limits.context_window, model_id

    def test_fallback_model_is_in_table(self):
        assert FALLBACK_MODEL in MODEL_LIMITS


class TestFallback:
    @pytest.mark.parametrize("model_id", ["totally-unknown-id", "", "GPT-4O"])
    def test_unknown_model_gets_fallback(self, model_id):
        assert get_model_limits(model_id) == MODEL_LIMITS[FALLBACK_MODEL]

    def test_none_uses_default_model(self):
        expected = MODEL_LIMITS.get(DEFAULT_TOKEN_MODEL, MODEL_LIMITS[FALLBACK_MODEL])
        assert get_model_limits(None) == expected

    def test_is_known_model(self):
        assert is_known_model("llama3.1:8b")
        assert not is_known_model("totally-unknown-id")
        assert not is_known_model(None)

    def test_resolve_model_id(self):
        assert resolve_model_id("phi-3") == "phi-3"
        assert resolve_model_id("totally-unknown-id") == FALLBACK_MODEL
        expected_default = DEFAULT_TOKEN_MODEL if is_known_model(DEFAULT_TOKEN_MODEL) else FALLBACK_MODEL
        assert resolve_model_id(None) == expected_default


class TestPricing:
    def test_cost_per_thousand(self):
        pricing = get_model_limits("gpt-4o").pricing
        assert pricing.input_cost(1000) == Decimal("0.0025")
        assert pricing.output_cost(2000) == Decimal("0.02")

    def test_local_models_are_free(self):
        pricing = get_model_limits("mistral-7b").pricing
        assert pricing.input_cost(10_000) == 0
        assert pricing.output_cost(10_000) == 0

    def test_costs_are_exact_decimals(self):
        pricing = get_model_limits("gpt-4o").pricing
        assert pricing.input_cost(180) == Decimal("0.00045")
        assert pricing.input_cost(1) == Decimal("0.0000025")
