# tests/test_context_selector.py
"""
Tests for context selection under a token budget.

Covers:
- Everything fits (NONE)
- Oldest-first eviction with the budget filled exactly (OLDEST_FIRST)
- Eviction with headroom left over (COMPRESSION_NEEDED)
- Newest messages alone overflowing (EMERGENCY)
- Ordering, exclusion and token stats
"""

import pytest

from chuk_ai_context_manager.context_selector import (
    ContextSelectorConfig,
    select_optimal_context,
)
from chuk_ai_context_manager.models import DocumentContext, Message, MessageRole, PruningStrategy
from chuk_ai_context_manager.token_estimator import estimate_token_count

# phi-3: 4096 token window, 85% -> 3481 tokens allowed
MODEL = "phi-3"
MAX_ALLOWED = 3481

MEDIUM = "word " * 100
HUGE = "word " * 1000


def _rag(tokens: int) -> list[DocumentContext]:
    return [DocumentContext(name="ref.txt", content="reference", token_count=tokens)]


class TestNoPruning:
    def test_everything_fits(self, make_messages):
        messages = make_messages(["hi", "hello there", "how are you?"])
        selection = select_optimal_context(messages, "Be nice.", [], "gpt-4o")

        assert selection.pruning_strategy == PruningStrategy.NONE
        assert selection.included_messages == messages
        assert selection.excluded_messages == []

    def test_empty_history(self):
        selection = select_optimal_context([], "system", [], MODEL)
        assert selection.pruning_strategy == PruningStrategy.NONE
        assert selection.token_stats.conversation == 0

    def test_token_stats(self, make_messages):
        messages = make_messages(["hello world", "one two three"])
        selection = select_optimal_context(messages, "hello world", _rag(10), MODEL)
        stats = selection.token_stats

        assert stats.system == 3
        assert stats.rag == 10
        assert stats.conversation == 7
        assert stats.total == 20
        assert stats.available == MAX_ALLOWED - 20


class TestEviction:
    def test_budget_filled_exactly_is_oldest_first(self, make_messages):
        messages = make_messages([MEDIUM] * 10)
        per_message = estimate_token_count(MEDIUM)
        docs = _rag(MAX_ALLOWED - 6 * per_message)

        selection = select_optimal_context(messages, "", docs, MODEL)

        assert selection.pruning_strategy == PruningStrategy.OLDEST_FIRST
        assert selection.included_messages == messages[4:]
        assert selection.excluded_messages == messages[:4]
        assert selection.token_stats.total == MAX_ALLOWED
        assert selection.token_stats.available == 0

    def test_headroom_left_is_compression_needed(self, make_messages):
        messages = make_messages([MEDIUM] * 10)
        per_message = estimate_token_count(MEDIUM)
        docs = _rag(MAX_ALLOWED - 6 * per_message - 1)

        selection = select_optimal_context(messages, "", docs, MODEL)

        assert selection.pruning_strategy == PruningStrategy.COMPRESSION_NEEDED
        assert len(selection.included_messages) == 6
        assert selection.token_stats.available == 1

    def test_newest_four_always_kept(self, make_messages):
        messages = make_messages([HUGE] * 2 + ["short"] * 4)
        selection = select_optimal_context(messages, "", [], MODEL)

        assert selection.pruning_strategy != PruningStrategy.EMERGENCY
        for message in messages[-4:]:
            assert message in selection.included_messages

    def test_custom_guarantee(self, make_messages):
        messages = make_messages([MEDIUM] * 10)
        per_message = estimate_token_count(MEDIUM)
        docs = _rag(MAX_ALLOWED - 2 * per_message)

        selection = select_optimal_context(
            messages, "", docs, MODEL, config=ContextSelectorConfig(guaranteed_recent=2)
        )
        assert selection.included_messages == messages[-2:]


class TestEmergency:
    def test_newest_four_overflow(self, make_messages):
        messages = make_messages([HUGE] * 6)
        per_message = estimate_token_count(HUGE)
        assert 4 * per_message > MAX_ALLOWED

        selection = select_optimal_context(messages, "", [], MODEL)

        assert selection.pruning_strategy == PruningStrategy.EMERGENCY
        assert selection.included_messages == messages[-2:]
        # Nothing outside the guaranteed set is considered
        for message in messages[:2]:
            assert message not in selection.included_messages
        assert selection.token_stats.total <= MAX_ALLOWED

    def test_fixed_costs_alone_overflow(self, make_messages):
        messages = make_messages(["hello", "world"])
        selection = select_optimal_context(messages, "", _rag(MAX_ALLOWED + 1), MODEL)

        assert selection.pruning_strategy == PruningStrategy.EMERGENCY
        assert selection.included_messages == []
        assert selection.excluded_messages == messages
        assert selection.token_stats.available < 0


class TestOrdering:
    def test_included_returned_chronologically(self, make_messages):
        messages = make_messages(["first", "second", "third", "fourth", "fifth"])
        selection = select_optimal_context(list(reversed(messages)), "", [], "gpt-4o")
        assert selection.included_messages == messages

    def test_naive_and_aware_timestamps_mixed(self):
        older = Message(role=MessageRole.USER, content="a", timestamp="2024-01-01T00:00:00")
        newer = Message(role=MessageRole.ASSISTANT, content="b")
        selection = select_optimal_context([newer, older], "", [], "gpt-4o")

        assert selection.included_messages == [older, newer]
        assert selection.pruning_strategy == PruningStrategy.NONE

    def test_excluded_keep_input_order(self, make_messages):
        messages = make_messages([MEDIUM] * 10)
        per_message = estimate_token_count(MEDIUM)
        selection = select_optimal_context(messages, "", _rag(MAX_ALLOWED - 5 * per_message), MODEL)
        assert selection.excluded_messages == messages[:5]

    @pytest.mark.parametrize("percentage", [10, 50, 85, 100])
    def test_never_exceeds_budget_outside_emergency(self, make_messages, percentage):
        messages = make_messages([MEDIUM] * 30)
        selection = select_optimal_context(messages, "", [], MODEL, max_context_percentage=percentage)
        if selection.pruning_strategy != PruningStrategy.EMERGENCY:
            assert selection.token_stats.total <= 4096 * percentage // 100
