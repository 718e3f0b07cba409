"""
Copyright (c) 2025. All rights reserved.
"""

"""
Command line entry point for linecount.
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .configs import CountConfig, SortOrder
from .errors import LineCountError
from .pipeline import run

logger = logging.getLogger(__name__)


def sort_order(value: str) -> SortOrder:
    """argparse type for --sort-by, case-insensitive."""
    try:
        return SortOrder.from_str(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def positive_int(value: str) -> int:
    """argparse type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="linecount",
        description="Count identical lines and report them ranked by frequency or key",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  linecount access.log                 # All lines, most frequent first
  linecount -m 10 access.log           # Ten most frequent lines
  linecount -s key words.txt           # All lines in byte order
  cut -f1 data.tsv | linecount -m 5    # Read from standard input
  linecount -v -w 4 big.txt            # Log timings, rank with 4 threads
        """,
    )

    parser.add_argument(
        "-s",
        "--sort-by",
        type=sort_order,
        default=SortOrder.COUNT,
        metavar="{count,key,none}",
        help="Order by descending count, by line bytes, or not at all (default: count)",
    )

    parser.add_argument(
        "-m",
        "--max-items",
        type=positive_int,
        default=None,
        help="Report at most this many lines (default: all)",
    )

    parser.add_argument(
        "-w",
        "--num-workers",
        type=positive_int,
        default=None,
        help="Threads used while ranking (default: all CPU cores)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log phase timings and memory usage to stderr",
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="File to read (default: standard input)",
    )

    return parser.parse_args(argv)


def _discard_stdout() -> None:
    # Point stdout at devnull so the interpreter's final flush cannot raise
    # a second BrokenPipeError after the reader has gone away.
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run linecount and return the process exit status.

    Returns:
        0 on success or when the output reader closed early, 1 on any
        input, output, decoding or overflow error
    """
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    # Report bytes must be UTF-8 with LF endings whatever the locale says
    sys.stdout.reconfigure(encoding="utf-8", newline="\n")

    config = CountConfig.from_args(args)

    try:
        stats = run(config)
    except LineCountError as e:
        logger.error(str(e))
        return 1

    if stats.cancelled:
        _discard_stdout()

    return 0


if __name__ == "__main__":
    sys.exit(main())
