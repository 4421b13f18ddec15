# chuk_ai_context_manager/compression/__init__.py
"""
Conversation compression.

- lossless: reversible run-length + phrase encoding
- strategies: sentence pruning and key-point extraction
- statistics: trends and effectiveness derived from the event log
- engine: CompressionEngine tying strategies, event log and statistics together
"""

from .engine import CompressionEngine, create_compression_engine
from .lossless import generate_checksum
from .statistics import build_efficiency_report, build_statistics

__all__ = [
    "CompressionEngine",
    "create_compression_engine",
    "generate_checksum",
    "build_efficiency_report",
    "build_statistics",
]
