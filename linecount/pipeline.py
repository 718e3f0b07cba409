"""
Copyright (c) 2025. All rights reserved.
"""

"""
Count pipeline: read -> count -> rank -> emit.

Reading and counting run sequentially on the calling thread. Ranking may
fan out to worker threads over a read-only snapshot of the table. Emission
writes to the output sink until done or until the consumer goes away.
"""

import logging
import sys
import time
from dataclasses import dataclass
from typing import Optional, TextIO

import psutil

from .configs import CountConfig
from .counter import count_records, total_count
from .emitter import CancellationToken, emit_counts
from .ranker import rank_counts
from .reader import open_input, read_records

logger = logging.getLogger(__name__)


def get_memory_usage() -> float:
    """Get current resident memory usage in MB"""
    process = psutil.Process()
    return process.memory_info().rss / (1024 * 1024)


@dataclass
class RunStats:
    """Summary of a completed run.

    Attributes:
        num_records (int): Records read from the input
        num_unique (int): Distinct records in the frequency table
        num_written (int): Lines written to the output
        cancelled (bool): Whether output stopped because the consumer went away
        count_seconds (float): Time spent reading and counting
        rank_seconds (float): Time spent ranking
        emit_seconds (float): Time spent writing output
    """

    num_records: int = 0
    num_unique: int = 0
    num_written: int = 0
    cancelled: bool = False
    count_seconds: float = 0.0
    rank_seconds: float = 0.0
    emit_seconds: float = 0.0


def run(
    config: CountConfig,
    sink: Optional[TextIO] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> RunStats:
    """
    Execute one counting run.

    Args:
        config: Run configuration
        sink: Text stream for the report, defaults to standard output
        cancel_token: Token used to stop emission, a fresh one if omitted

    Returns:
        RunStats describing the run

    Raises:
        LineCountError: Any fatal input, output, decoding or overflow error
    """
    if sink is None:
        sink = sys.stdout
    if cancel_token is None:
        cancel_token = CancellationToken()
    stats = RunStats()

    start_time = time.time()
    with open_input(config.input) as stream:
        counts = count_records(read_records(stream))
    stats.count_seconds = time.time() - start_time
    stats.num_unique = len(counts)
    stats.num_records = total_count(counts)
    logger.info(
        f"Counted {stats.num_records:,} records ({stats.num_unique:,} unique) "
        f"in {stats.count_seconds:.4f} seconds"
    )
    logger.info(f"Memory usage after counting: {get_memory_usage():.1f} MB")

    start_time = time.time()
    ranked = rank_counts(
        counts,
        order=config.sort_by,
        max_items=config.max_items,
        num_workers=config.num_workers,
    )
    stats.rank_seconds = time.time() - start_time
    logger.info(
        f"Ranked {len(ranked):,} entries by {config.sort_by} "
        f"using up to {config.num_workers} workers in {stats.rank_seconds:.4f} seconds"
    )

    start_time = time.time()
    stats.num_written = emit_counts(sink, ranked, config.max_items, cancel_token)
    stats.emit_seconds = time.time() - start_time
    stats.cancelled = cancel_token.cancelled
    logger.info(f"Wrote {stats.num_written:,} lines in {stats.emit_seconds:.4f} seconds")

    return stats
