"""
Copyright (c) 2025. All rights reserved.
"""

"""
Emitter: writes ranked (record, count) pairs as tab-separated text lines.

Emission stops early, without error, when the output consumer goes away.
That condition is carried by an explicit CancellationToken handed to the
write loop rather than by process-wide state.
"""

import itertools
import logging
import threading
from typing import Iterable, Optional, TextIO

from .errors import OutputWriteError, TextDecodingError

logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe flag signalling that output should stop."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def format_entry(record: bytes, count: int) -> str:
    """
    Format one report line.

    Args:
        record: Raw record bytes, expected to be UTF-8
        count: Occurrence count

    Returns:
        Line of the form "<record>\\t<count>\\n"

    Raises:
        TextDecodingError: If record is not valid UTF-8
    """
    try:
        text = record.decode("utf-8")
    except UnicodeDecodeError as e:
        raise TextDecodingError(record, e.start, e.reason) from e
    return f"{text}\t{count}\n"


def emit_counts(
    sink: TextIO,
    ranked: Iterable[tuple[bytes, int]],
    max_items: Optional[int] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> int:
    """
    Write ranked entries to sink, one line each, in the given order.

    The limit is applied again here so callers can pass an untruncated
    sequence. The token is checked after every line; a BrokenPipeError from
    the sink cancels the token and ends emission quietly.

    Args:
        sink: Text stream to write to
        ranked: Ordered (record, count) pairs
        max_items: Maximum number of lines to write, None for all
        cancel_token: Token that stops emission once cancelled

    Returns:
        Number of lines written before completion or cancellation

    Raises:
        TextDecodingError: If a record is not valid UTF-8. Lines written
            before it stay written.
        OutputWriteError: If the sink fails for a reason other than a
            closed pipe
    """
    if cancel_token is None:
        cancel_token = CancellationToken()

    written = 0
    try:
        for record, count in itertools.islice(ranked, max_items):
            if cancel_token.cancelled:
                break
            line = format_entry(record, count)
            sink.write(line)
            written += 1
        sink.flush()
    except BrokenPipeError:
        logger.info(f"Output closed by reader after {written} lines")
        cancel_token.cancel()
    except OSError as e:
        raise OutputWriteError(f"Failed to write output: {e}") from e

    return written
