"""
Copyright (c) 2025. All rights reserved.
"""

"""
Ranker: orders counted records and truncates them to a limit.

Two strategies share the Ranker interface:

1. **FullSortRanker**: used when every entry is reported. Entries are split
   into chunks, each chunk is sorted on a worker thread, and the sorted
   chunks are k-way merged.

2. **TopKRanker**: used when a limit is given. Each worker keeps only the
   best `limit` entries of its chunk using a bounded heap, and the partial
   winners are merged. The remainder is never sorted.

Both order entries with a key function that defines a total order over
unique records, so the result does not depend on how many workers ran or
in what order they finished.

sorted() and heapq hold the GIL while comparing Python tuples, so the
thread fan-out does not speed up ranking on CPython. It bounds the work
per task and keeps the merge path exercised; expect single-core speed.
"""

import heapq
import itertools
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from .configs import SortOrder
from .counter import FrequencyTable

logger = logging.getLogger(__name__)

Entry = tuple[bytes, int]
SortKey = Callable[[Entry], object]

# Below this many entries thread start-up costs more than it saves
MIN_PARALLEL_SIZE = 10_000


def _by_count(entry: Entry) -> tuple[int, bytes]:
    # Descending count, then ascending record bytes
    return (-entry[1], entry[0])


def _by_key(entry: Entry) -> bytes:
    # Records are unique keys, so the bytes alone are a total order
    return entry[0]


def sort_key_for(order: SortOrder) -> Optional[SortKey]:
    """
    Get the key function for a sort order.

    Args:
        order: Ranking criterion

    Returns:
        Key function usable with sorted() and heapq, or None for SortOrder.NONE

    Raises:
        ValueError: If order is not a SortOrder member
    """
    if order is SortOrder.COUNT:
        return _by_count
    elif order is SortOrder.KEY:
        return _by_key
    elif order is SortOrder.NONE:
        return None
    else:
        raise ValueError(f"Unsupported sort order: {order!r}")


def chunkify(entries: list[Entry], num_chunks: int) -> list[list[Entry]]:
    """
    Split entries into at most num_chunks contiguous, near-equal chunks.

    The first `len(entries) % num_chunks` chunks get one extra entry. Empty
    chunks are never produced.

    Example:
        >>> chunkify([1, 2, 3, 4, 5], 2)
        [[1, 2, 3], [4, 5]]
    """
    num_entries = len(entries)
    per_chunk, remainder = divmod(num_entries, num_chunks)

    chunks = []
    start = 0
    for idx in range(num_chunks):
        end = start + per_chunk + (1 if idx < remainder else 0)
        if start < num_entries:
            chunks.append(entries[start:end])
        start = end
    return chunks


class Ranker:
    """
    Base class for ranking strategies.

    Subclasses implement _rank_chunk, which ranks one chunk on a worker
    thread, and _merge, which combines the per-chunk results on the calling
    thread. Workers only read their chunk and return a new list.
    """

    def __init__(
        self,
        key: SortKey,
        num_workers: int = 1,
        min_parallel_size: int = MIN_PARALLEL_SIZE,
    ):
        if num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {num_workers}")
        self.key = key
        self.num_workers = num_workers
        self.min_parallel_size = min_parallel_size

    def _rank_chunk(self, chunk: list[Entry]) -> list[Entry]:
        raise NotImplementedError

    def _merge(self, partials: list[list[Entry]]) -> list[Entry]:
        raise NotImplementedError

    def rank(self, entries: Iterable[Entry]) -> list[Entry]:
        """
        Rank entries according to this strategy.

        Args:
            entries: (record, count) pairs; materialized into a list snapshot

        Returns:
            Ranked list of (record, count) pairs
        """
        entries = list(entries)
        num_chunks = min(self.num_workers, max(1, len(entries) // max(1, self.min_parallel_size)))

        if num_chunks <= 1:
            return self._rank_chunk(entries)

        chunks = chunkify(entries, num_chunks)
        logger.info(
            f"{type(self).__name__}: ranking {len(entries):,} entries "
            f"in {len(chunks)} chunks"
        )
        with ThreadPoolExecutor(max_workers=len(chunks)) as executor:
            partials = list(executor.map(self._rank_chunk, chunks))
        return self._merge(partials)


class FullSortRanker(Ranker):
    """Sorts every entry: per-chunk sorts followed by a k-way merge."""

    def _rank_chunk(self, chunk: list[Entry]) -> list[Entry]:
        return sorted(chunk, key=self.key)

    def _merge(self, partials: list[list[Entry]]) -> list[Entry]:
        return list(heapq.merge(*partials, key=self.key))


class TopKRanker(Ranker):
    """Selects and orders only the best `limit` entries."""

    def __init__(
        self,
        key: SortKey,
        limit: int,
        num_workers: int = 1,
        min_parallel_size: int = MIN_PARALLEL_SIZE,
    ):
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")
        super().__init__(key, num_workers, min_parallel_size)
        self.limit = limit

    def _rank_chunk(self, chunk: list[Entry]) -> list[Entry]:
        # O(n log k) bounded heap instead of a full O(n log n) sort
        return heapq.nsmallest(self.limit, chunk, key=self.key)

    def _merge(self, partials: list[list[Entry]]) -> list[Entry]:
        merged = heapq.merge(*partials, key=self.key)
        return list(itertools.islice(merged, self.limit))


class UnorderedRanker(Ranker):
    """Keeps the frequency table's own iteration order."""

    def __init__(self, limit: Optional[int] = None):
        super().__init__(key=None)
        self.limit = limit

    def rank(self, entries: Iterable[Entry]) -> list[Entry]:
        return list(itertools.islice(entries, self.limit))


def get_ranker(
    order: SortOrder,
    max_items: Optional[int] = None,
    num_workers: int = 1,
    min_parallel_size: int = MIN_PARALLEL_SIZE,
) -> Ranker:
    """
    Choose the ranking strategy for a sort order and limit.

    Args:
        order: Ranking criterion
        max_items: Limit on reported entries, None for all
        num_workers: Maximum worker threads for sorting or selection
        min_parallel_size: Minimum entries per chunk before work is split

    Returns:
        UnorderedRanker for SortOrder.NONE, TopKRanker when a limit is
        given, FullSortRanker otherwise
    """
    key = sort_key_for(order)
    if key is None:
        return UnorderedRanker(max_items)
    if max_items is not None:
        return TopKRanker(key, max_items, num_workers, min_parallel_size)
    return FullSortRanker(key, num_workers, min_parallel_size)


def rank_counts(
    counts: FrequencyTable,
    order: SortOrder = SortOrder.COUNT,
    max_items: Optional[int] = None,
    num_workers: int = 1,
    min_parallel_size: int = MIN_PARALLEL_SIZE,
) -> list[Entry]:
    """
    Rank a frequency table.

    Example:
        >>> rank_counts({b"c": 2, b"a": 1, b"b": 3})
        [(b'b', 3), (b'c', 2), (b'a', 1)]
        >>> rank_counts({b"c": 2, b"a": 1, b"b": 3}, SortOrder.KEY, max_items=2)
        [(b'a', 1), (b'b', 3)]
    """
    ranker = get_ranker(order, max_items, num_workers, min_parallel_size)
    return ranker.rank(counts.items())
