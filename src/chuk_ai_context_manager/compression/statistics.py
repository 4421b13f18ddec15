# chuk_ai_context_manager/compression/statistics.py
"""
Statistics derived from a compression event log.

Everything here is a pure function of the events and the current time, so
the engine can recompute after every event and tests can pin the clock.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from chuk_ai_context_manager.models.compression import (
    CompressionEvent,
    CompressionHistory,
    CompressionStatistics,
    DailyCompressionBucket,
    EfficiencyReport,
    StrategyEfficiency,
    WeeklyCompressionBucket,
)
from chuk_ai_context_manager.models.enums import CompressionStrategyType

HISTORY_DAYS = 7
HISTORY_WEEKS = 4
RECENT_EVENTS = 10
LOSSLESS_ACCURACY = 0.99


def _week_start(day: date) -> date:
    """Sunday starting the calendar week that contains ``day``."""
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def _week_label(day: date) -> str:
    return f"Week of {day.isoformat()}"


def build_history(events: Sequence[CompressionEvent], now: datetime) -> CompressionHistory:
    """Daily buckets for the last 7 days and weekly buckets for the last 4 weeks."""
    today = now.date()

    daily: dict[str, DailyCompressionBucket] = {}
    for offset in range(HISTORY_DAYS - 1, -1, -1):
        key = (today - timedelta(days=offset)).isoformat()
        daily[key] = DailyCompressionBucket(date=key)

    weekly: dict[str, WeeklyCompressionBucket] = {}
    this_week = _week_start(today)
    for offset in range(HISTORY_WEEKS - 1, -1, -1):
        key = _week_label(this_week - timedelta(weeks=offset))
        weekly[key] = WeeklyCompressionBucket(week=key)

    for event in events:
        event_day = event.timestamp.date()
        day_bucket = daily.get(event_day.isoformat())
        if day_bucket is not None:
            day_bucket.compressions += 1
            day_bucket.tokens_saved += event.tokens_saved
        week_bucket = weekly.get(_week_label(_week_start(event_day)))
        if week_bucket is not None:
            week_bucket.compressions += 1
            week_bucket.tokens_saved += event.tokens_saved

    return CompressionHistory(daily=list(daily.values()), weekly=list(weekly.values()))


def build_statistics(events: Sequence[CompressionEvent], now: datetime) -> CompressionStatistics:
    """Recompute all statistics from the full event log."""
    if not events:
        return CompressionStatistics()

    count = len(events)

    by_type: dict[str, int] = defaultdict(int)
    saved_by_type: dict[str, int] = defaultdict(int)
    for event in events:
        by_type[event.strategy.value] += 1
        saved_by_type[event.strategy.value] += event.tokens_saved

    lossless = sum(
        1 for e in events if e.strategy == CompressionStrategyType.LOSSLESS or e.accuracy >= LOSSLESS_ACCURACY
    )

    # max() keeps the first strategy seen on ties
    most_effective = max(saved_by_type, key=lambda s: saved_by_type[s])

    return CompressionStatistics(
        total_compressions=count,
        compressions_by_type=dict(by_type),
        average_compression_ratio=sum(e.ratio for e in events) / count,
        total_tokens_saved=sum(e.tokens_saved for e in events),
        lossless_percentage=lossless / count * 100,
        average_accuracy=sum(e.accuracy for e in events) / count,
        most_effective_strategy=most_effective,
        recent_compressions=list(events[-RECENT_EVENTS:]),
        compression_history=build_history(events, now),
    )


def build_efficiency_report(
    events: Sequence[CompressionEvent],
    statistics: CompressionStatistics,
) -> EfficiencyReport:
    """Per-strategy breakdown for dashboards."""
    per_strategy: list[StrategyEfficiency] = []
    for strategy, count in statistics.compressions_by_type.items():
        matching = [e for e in events if e.strategy.value == strategy]
        per_strategy.append(
            StrategyEfficiency(
                strategy=strategy,
                count=count,
                tokens_saved=sum(e.tokens_saved for e in matching),
                avg_ratio=sum(e.ratio for e in matching) / (len(matching) or 1),
            )
        )

    return EfficiencyReport(
        total_tokens_saved=statistics.total_tokens_saved,
        average_compression_ratio=statistics.average_compression_ratio,
        lossless_percentage=statistics.lossless_percentage,
        compressions_by_strategy=per_strategy,
    )
