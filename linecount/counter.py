"""
Copyright (c) 2025. All rights reserved.
"""

"""
Frequency table: accumulates occurrence counts per distinct record.

Counters model 64-bit unsigned integers. A record occurring more than
COUNTER_MAX times is a fatal CounterOverflowError rather than a silently
saturated count.
"""

from collections import defaultdict
from typing import Iterable

from .errors import CounterOverflowError

COUNTER_MAX = 2**64 - 1

FrequencyTable = dict[bytes, int]


def count_records(records: Iterable[bytes]) -> FrequencyTable:
    """
    Count how often each distinct record occurs.

    Records are compared by their raw bytes. The input is consumed
    sequentially in one pass.

    Args:
        records: Iterable of records, typically from read_records

    Returns:
        Dictionary mapping each distinct record to its occurrence count

    Raises:
        CounterOverflowError: If any count would exceed COUNTER_MAX

    Example:
        >>> count_records([b"b", b"a", b"b"])
        {b'b': 2, b'a': 1}
    """
    counts = defaultdict(int)
    num_records = 0
    for record in records:
        counts[record] += 1
        num_records += 1

    # No single counter can exceed the total number of records read
    if num_records > COUNTER_MAX:
        for record, count in counts.items():
            if count > COUNTER_MAX:
                raise CounterOverflowError(
                    f"Record {record[:64]!r} occurs {count} times, "
                    f"more than the counter maximum {COUNTER_MAX}"
                )

    return dict(counts)


def total_count(counts: FrequencyTable) -> int:
    """Sum of all counters, equal to the number of records counted."""
    return sum(counts.values())
