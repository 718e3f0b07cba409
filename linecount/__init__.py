"""
Copyright (c) 2025. All rights reserved.
"""

"""
Byte-exact line frequency counting.

Reads newline-delimited records, counts each distinct record and reports
(record, count) pairs ranked by count or by record bytes.

Modules:
    reader: Binary-safe record extraction with CRLF normalization
    counter: Frequency table accumulation
    ranker: Full sort and top-K selection strategies
    emitter: Report formatting with early stop on closed output
    pipeline: End-to-end run
    cli: Command line entry point
"""

from .configs import CountConfig, SortOrder
from .counter import COUNTER_MAX, count_records, total_count
from .emitter import CancellationToken, emit_counts, format_entry
from .errors import (
    CounterOverflowError,
    InputOpenError,
    InputReadError,
    LineCountError,
    OutputWriteError,
    TextDecodingError,
)
from .pipeline import RunStats, run
from .ranker import FullSortRanker, TopKRanker, UnorderedRanker, get_ranker, rank_counts
from .reader import open_input, read_records

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "CountConfig",
    "SortOrder",
    # Pipeline stages
    "read_records",
    "open_input",
    "count_records",
    "total_count",
    "COUNTER_MAX",
    "get_ranker",
    "rank_counts",
    "FullSortRanker",
    "TopKRanker",
    "UnorderedRanker",
    "emit_counts",
    "format_entry",
    "CancellationToken",
    "run",
    "RunStats",
    # Errors
    "LineCountError",
    "InputOpenError",
    "InputReadError",
    "OutputWriteError",
    "TextDecodingError",
    "CounterOverflowError",
]
