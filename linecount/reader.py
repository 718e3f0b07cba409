"""
Copyright (c) 2025. All rights reserved.
"""

"""
Record reader: splits a binary stream into newline-delimited records.

Records are raw bytes with the line terminator removed. A terminator is a
single LF byte, and a CR immediately before it is removed as well. The
input is read in fixed-size chunks and records spanning chunk boundaries
are stitched back together, so memory use is bounded by the chunk size
plus the longest record.
"""

import logging
import sys
from contextlib import contextmanager
from typing import BinaryIO, Iterator, Optional

from .errors import InputOpenError, InputReadError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def _strip_cr(line: bytes) -> bytes:
    if line.endswith(b"\r"):
        return line[:-1]
    return line


def read_records(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """
    Lazily yield records from a binary stream in a single forward pass.

    A final record without a trailing newline is still yielded. An empty
    stream yields nothing, and a bare newline yields an empty record.
    Pieces of a record spanning several chunks are collected and joined
    once, so reading is linear in the record length.

    Args:
        stream: Binary file-like object opened for reading
        chunk_size: Number of bytes requested per read call

    Yields:
        bytes: One record per input line, terminator removed

    Raises:
        InputReadError: If the stream raises OSError while reading. The
            partially read record is discarded.

    Example:
        >>> list(read_records(io.BytesIO(b"a\\r\\nb\\n")))
        [b'a', b'b']
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    pending: list[bytes] = []
    while True:
        try:
            chunk = stream.read(chunk_size)
        except OSError as e:
            raise InputReadError(f"Failed to read input: {e}") from e
        if not chunk:
            break

        lines = chunk.split(b"\n")
        if len(lines) == 1:
            pending.append(chunk)
            continue

        # First piece completes the record carried over from earlier chunks
        pending.append(lines[0])
        yield _strip_cr(b"".join(pending))
        for line in lines[1:-1]:
            yield _strip_cr(line)
        pending = [lines[-1]] if lines[-1] else []

    # Unterminated final record; a lone trailing CR is kept since only CRLF is normalized
    if pending:
        yield b"".join(pending)


@contextmanager
def open_input(path: Optional[str] = None) -> Iterator[BinaryIO]:
    """
    Open the input as a binary stream.

    Args:
        path: File to read, or None for standard input. Standard input is
            left open when the context exits.

    Yields:
        Binary stream positioned at the start of the input

    Raises:
        InputOpenError: If the named file is missing or unreadable
    """
    if path is None:
        logger.info("Reading records from standard input")
        yield sys.stdin.buffer
        return

    try:
        f = open(path, "rb")
    except FileNotFoundError:
        raise InputOpenError(path, "no such file") from None
    except IsADirectoryError:
        raise InputOpenError(path, "is a directory") from None
    except PermissionError:
        raise InputOpenError(path, "permission denied") from None
    except OSError as e:
        raise InputOpenError(path, str(e)) from e

    logger.info(f"Reading records from {path}")
    with f:
        yield f
