"""
Copyright (c) 2025. All rights reserved.
"""

"""
Error types raised while counting and reporting records.

Every fatal condition of a run derives from LineCountError so the command
line entry point can report it with a single handler. Each error also
derives from the closest builtin so callers that only know about OSError,
ValueError or OverflowError still catch it.
"""


class LineCountError(Exception):
    """Base class for all fatal errors of a counting run."""


class InputOpenError(LineCountError, OSError):
    """The named input file is missing or cannot be opened."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open input {path!r}: {reason}")


class InputReadError(LineCountError, OSError):
    """Reading the input stream failed part way through."""


class OutputWriteError(LineCountError, OSError):
    """Writing the report failed for a reason other than a closed pipe."""


class TextDecodingError(LineCountError, ValueError):
    """A counted record is not valid UTF-8 and cannot be printed as text."""

    def __init__(self, record: bytes, position: int, reason: str):
        self.record = record
        self.position = position
        self.reason = reason
        preview = record[:64]
        suffix = "..." if len(record) > 64 else ""
        super().__init__(
            f"Record {preview!r}{suffix} is not valid UTF-8 "
            f"at byte {position}: {reason}"
        )


class CounterOverflowError(LineCountError, OverflowError):
    """A record occurred more often than a 64-bit counter can hold."""
