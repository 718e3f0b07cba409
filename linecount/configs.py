"""
Copyright (c) 2025. All rights reserved.
"""

"""
Configuration classes for line counting runs.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SortOrder(Enum):
    """Ranking criterion applied to the counted records.

    COUNT orders by descending count with ties broken by ascending record
    bytes. KEY orders by ascending record bytes. NONE keeps the table's
    own iteration order.
    """

    COUNT = "count"
    KEY = "key"
    NONE = "none"

    @classmethod
    def from_str(cls, value: str) -> "SortOrder":
        """Parse a sort order name, ignoring case."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Invalid sort order: {value!r} (choose from {choices})"
            ) from None

    def __str__(self) -> str:
        return self.value


@dataclass
class CountConfig:
    """Configuration for a single counting run.

    Attributes:
        sort_by (SortOrder): Ranking criterion for the report
        max_items (Optional[int]): Maximum number of entries to report, None for all
        input (Optional[str]): Path to read from, None for standard input
        num_workers (Optional[int]): Worker threads used while ranking, None for CPU count
        verbose (bool): Whether to log phase timings and memory usage
    """

    sort_by: SortOrder = SortOrder.COUNT
    max_items: Optional[int] = None
    input: Optional[str] = None
    num_workers: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if isinstance(self.sort_by, str):
            self.sort_by = SortOrder.from_str(self.sort_by)
        if self.max_items is not None and self.max_items <= 0:
            raise ValueError(f"max_items must be positive, got {self.max_items}")
        if self.num_workers is None:
            self.num_workers = os.cpu_count() or 1
        elif self.num_workers < 1:
            raise ValueError(f"num_workers must be at least 1, got {self.num_workers}")

    @classmethod
    def from_args(cls, args) -> "CountConfig":
        """Build a config from an argparse namespace."""
        return cls(
            sort_by=args.sort_by,
            max_items=args.max_items,
            input=args.input,
            num_workers=args.num_workers,
            verbose=args.verbose,
        )
