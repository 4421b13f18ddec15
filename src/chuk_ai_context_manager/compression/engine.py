# chuk_ai_context_manager/compression/engine.py
"""
CompressionEngine - compresses conversation text and tracks how it went.

The engine offers four strategies with different fidelity/size trade-offs:
- lossless: run-length + phrase substitution, fully reversible
- semantic: keeps the leading share of sentences
- summary: one key point per message
- hybrid: summarized older messages + lossless recent ones

Every call records a CompressionEvent in a bounded log, and statistics are
recomputed from the log afterwards. An engine holds global statistics for
everything it compressed, so create one per session or conversation.

Usage::

    engine = CompressionEngine()
    result = engine.compress_lossless(text, conversation_id="conv-1")
    original = engine.decompress(result)
"""

from __future__ import annotations

import logging
import math
import threading
import time
import uuid
from collections import deque
from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from chuk_ai_context_manager.compression import lossless, strategies
from chuk_ai_context_manager.compression.statistics import (
    build_efficiency_report,
    build_statistics,
)
from chuk_ai_context_manager.config import COMPRESSION_EVENT_CAPACITY
from chuk_ai_context_manager.exceptions import DecompressionError
from chuk_ai_context_manager.models.compression import (
    CompressionEvent,
    CompressionOptions,
    CompressionResult,
    CompressionStatistics,
    CompressionStrategy,
    EfficiencyReport,
)
from chuk_ai_context_manager.models.enums import CompressionStrategyType
from chuk_ai_context_manager.models.message import Message

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Fidelity estimates per strategy
LOSSLESS_ACCURACY = 1.0
SEMANTIC_ACCURACY_FACTOR = 0.9
SUMMARY_ACCURACY = 0.7
HYBRID_ACCURACY = 0.85

# Recommendation thresholds (tokens)
SMALL_CONVERSATION_TOKENS = 1000
MEDIUM_CONVERSATION_TOKENS = 5000

CHARS_PER_TOKEN = 4


def _char_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def _char_ratio(compressed: str, original: str) -> float:
    if not original:
        return 1.0
    return len(compressed) / len(original)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class CompressionEngine:
    """
    Stateful compressor with a bounded event log and derived statistics.

    Not a singleton: construct one per session (or use
    ``create_compression_engine``) so statistics never mix users.
    """

    def __init__(
        self,
        max_events: int = COMPRESSION_EVENT_CAPACITY,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize a CompressionEngine.

        Args:
            max_events: Events kept in the log; oldest are dropped beyond this.
            clock: Returns the current time. Defaults to UTC now.
        """
        self._events: deque[CompressionEvent] = deque(maxlen=max_events)
        self._clock = clock or _utc_now
        self._lock = threading.Lock()
        self._statistics = CompressionStatistics()

    @property
    def max_events(self) -> int:
        return self._events.maxlen or 0

    # =========================================================================
    # Event log
    # =========================================================================

    def _record_event(
        self,
        strategy: CompressionStrategyType,
        original_tokens: int,
        compressed_tokens: int,
        ratio: float,
        accuracy: float,
        conversation_id: str,
        message_count: int,
    ) -> CompressionEvent:
        event = CompressionEvent(
            id=f"comp_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}",
            timestamp=self._clock(),
            strategy=strategy,
            original_tokens=original_tokens,
            compressed_tokens=compressed_tokens,
            ratio=ratio,
            accuracy=accuracy,
            conversation_id=conversation_id,
            message_count=message_count,
        )
        with self._lock:
            self._events.append(event)
            self._statistics = build_statistics(list(self._events), self._clock())

        logger.debug(
            "Recorded %s compression for %s: %d -> %d tokens",
            strategy.value,
            conversation_id,
            original_tokens,
            compressed_tokens,
        )
        return event

    def _finish(
        self,
        strategy: CompressionStrategyType,
        original: str,
        compressed: str,
        accuracy: float,
        conversation_id: str,
        message_count: int,
        include_checksum: bool = False,
    ) -> CompressionResult:
        ratio = _char_ratio(compressed, original)
        event = self._record_event(
            strategy,
            _char_tokens(original),
            _char_tokens(compressed),
            ratio,
            accuracy,
            conversation_id,
            message_count,
        )
        return CompressionResult(
            strategy=strategy,
            compressed=compressed,
            ratio=ratio,
            original_length=len(original),
            accuracy=accuracy,
            checksum=lossless.generate_checksum(original) if include_checksum else None,
            event_id=event.id,
        )

    def get_events(self) -> list[CompressionEvent]:
        """Logged events, oldest first."""
        with self._lock:
            return list(self._events)

    # =========================================================================
    # Strategies
    # =========================================================================

    def compress_lossless(
        self,
        content: str,
        conversation_id: str = "unknown",
        message_count: int = 1,
        include_checksum: bool = False,
    ) -> CompressionResult:
        """Run-length and phrase encoding. Reversible with ``decompress``."""
        compressed = lossless.encode(content)
        return self._finish(
            CompressionStrategyType.LOSSLESS,
            content,
            compressed,
            LOSSLESS_ACCURACY,
            conversation_id,
            message_count,
            include_checksum=include_checksum,
        )

    def compress_semantic(
        self,
        content: str,
        preserve_ratio: float = strategies.DEFAULT_PRESERVE_RATIO,
        conversation_id: str = "unknown",
        message_count: int = 1,
    ) -> CompressionResult:
        """Keep the first ``ceil(n * preserve_ratio)`` sentences."""
        compressed = strategies.prune_sentences(content, preserve_ratio)
        return self._finish(
            CompressionStrategyType.SEMANTIC,
            content,
            compressed,
            preserve_ratio * SEMANTIC_ACCURACY_FACTOR,
            conversation_id,
            message_count,
        )

    def compress_summary(
        self,
        messages: Sequence[Message],
        conversation_id: str = "unknown",
        max_points: int = strategies.MAX_KEY_POINTS,
    ) -> CompressionResult:
        """Replace the messages with a list of key points."""
        original = strategies.join_contents(messages)
        compressed = strategies.format_summary(strategies.extract_key_points(messages, max_points))
        return self._finish(
            CompressionStrategyType.SUMMARY,
            original,
            compressed,
            SUMMARY_ACCURACY,
            conversation_id,
            len(messages),
        )

    def compress_hybrid(
        self,
        messages: Sequence[Message],
        strategy: CompressionStrategy | None = None,
        conversation_id: str = "unknown",
    ) -> CompressionResult:
        """
        Summarize older messages, keep the last three losslessly.

        The lossless pass over the recent messages is recorded as its own
        event, followed by the hybrid event.
        """
        original = strategies.join_contents(messages)
        older, recent = strategies.split_recent(messages)

        compressed = ""
        if older:
            compressed += f"[EARLIER] {'; '.join(strategies.extract_key_points(older))}. "
        if recent:
            inner = self.compress_lossless(strategies.format_transcript(recent), conversation_id)
            compressed += f"[RECENT] {inner.compressed}"

        include_checksum = strategy.include_checksum if strategy else False
        return self._finish(
            CompressionStrategyType.HYBRID,
            original,
            compressed,
            HYBRID_ACCURACY,
            conversation_id,
            len(messages),
            include_checksum=include_checksum,
        )

    def compress_with_strategy(
        self,
        strategy: CompressionStrategy,
        messages: Sequence[Message],
        conversation_id: str = "unknown",
    ) -> CompressionResult:
        """Apply ``strategy`` to the messages; text strategies see the joined content."""
        options = strategy.options or CompressionOptions()

        if strategy.type == CompressionStrategyType.LOSSLESS:
            return self.compress_lossless(
                strategies.join_contents(messages),
                conversation_id,
                len(messages),
                include_checksum=bool(options.include_checksum),
            )
        if strategy.type == CompressionStrategyType.SEMANTIC:
            return self.compress_semantic(
                strategies.join_contents(messages),
                options.preserve_ratio or strategies.DEFAULT_PRESERVE_RATIO,
                conversation_id,
                len(messages),
            )
        if strategy.type == CompressionStrategyType.SUMMARY:
            return self.compress_summary(
                messages,
                conversation_id,
                options.summary_length or strategies.MAX_KEY_POINTS,
            )
        return self.compress_hybrid(messages, strategy, conversation_id)

    # =========================================================================
    # Decompression
    # =========================================================================

    def decompress(
        self,
        compressed: CompressionResult | str,
        strategy: CompressionStrategy | CompressionStrategyType | str | None = None,
        strict: bool = False,
    ) -> str:
        """
        Undo a compression where possible.

        Lossless content is restored exactly. Summary and hybrid content is
        returned with a note saying it was compressed; semantic content is
        returned as is. Given a CompressionResult, the restored text is
        checked against the recorded length and checksum: a mismatch is
        logged, or raised as DecompressionError when ``strict``.
        """
        if isinstance(compressed, CompressionResult):
            result: CompressionResult | None = compressed
            text = compressed.compressed
            strategy_type = compressed.strategy
        else:
            result = None
            text = compressed
            if strategy is None:
                strategy_type = CompressionStrategyType.LOSSLESS
            elif isinstance(strategy, CompressionStrategy):
                strategy_type = strategy.type
            else:
                strategy_type = CompressionStrategyType(strategy)

        if strategy_type == CompressionStrategyType.LOSSLESS:
            restored = lossless.decode(text)
            if result is not None:
                self._validate(result, restored, strict)
            return restored

        if strategy_type in (CompressionStrategyType.SUMMARY, CompressionStrategyType.HYBRID):
            return f"[This content was compressed using {strategy_type.value} compression]:\n{text}"

        return text

    def _validate(self, result: CompressionResult, restored: str, strict: bool) -> None:
        problem = None
        if len(restored) != result.original_length:
            problem = f"restored {len(restored)} chars, expected {result.original_length}"
        elif result.checksum is not None and lossless.generate_checksum(restored) != result.checksum:
            problem = "checksum mismatch"

        if problem is None:
            return
        if strict:
            raise DecompressionError(
                f"Lossless decompression failed: {problem}",
                expected_length=result.original_length,
                actual_length=len(restored),
            )
        logger.warning("Lossless decompression of %s failed validation: %s", result.event_id, problem)

    # =========================================================================
    # Recommendation
    # =========================================================================

    def analyze_and_recommend_strategy(
        self,
        messages: Sequence[Message],
        token_count: int,
    ) -> CompressionStrategy:
        """Pick a strategy from conversation size and content."""
        if token_count < SMALL_CONVERSATION_TOKENS:
            return CompressionStrategy(type=CompressionStrategyType.LOSSLESS)

        if self._detect_patterns(messages):
            return CompressionStrategy(type=CompressionStrategyType.LOSSLESS)

        if token_count < MEDIUM_CONVERSATION_TOKENS:
            return CompressionStrategy(
                type=CompressionStrategyType.SEMANTIC,
                options=CompressionOptions(preserve_ratio=0.8),
            )

        return CompressionStrategy(
            type=CompressionStrategyType.HYBRID,
            options=CompressionOptions(preserve_ratio=0.6, include_checksum=True),
        )

    @staticmethod
    def _detect_patterns(messages: Sequence[Message]) -> bool:
        """True if lossless encoding has something to work with."""
        combined = strategies.join_contents(messages)
        return lossless.has_long_runs(combined) or lossless.contains_common_phrase(combined)

    def generate_checksum(self, content: str) -> str:
        return lossless.generate_checksum(content)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_compression_statistics(self) -> CompressionStatistics:
        """A copy of the current statistics."""
        with self._lock:
            return self._statistics.model_copy(deep=True)

    def get_efficiency_report(self) -> EfficiencyReport:
        with self._lock:
            return build_efficiency_report(list(self._events), self._statistics)

    def reset_statistics(self) -> None:
        """Clear the event log and statistics."""
        with self._lock:
            self._events.clear()
            self._statistics = CompressionStatistics()


def create_compression_engine(
    max_events: int | None = None,
    clock: Clock | None = None,
) -> CompressionEngine:
    """Build an engine for one session, using configured defaults."""
    return CompressionEngine(
        max_events=COMPRESSION_EVENT_CAPACITY if max_events is None else max_events,
        clock=clock,
    )
