"""
Copyright (c) 2025. All rights reserved.
"""

"""
Unit tests for configuration classes.
"""

import argparse
import os
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
)

import pytest

from linecount.configs import CountConfig, SortOrder


class TestSortOrder:
    """Test suite for SortOrder."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("count", SortOrder.COUNT),
            ("Count", SortOrder.COUNT),
            ("KEY", SortOrder.KEY),
            (" none ", SortOrder.NONE),
        ],
    )
    def test_from_str(self, text, expected):
        assert SortOrder.from_str(text) is expected

    def test_from_str_invalid(self):
        with pytest.raises(ValueError, match="count, key, none"):
            SortOrder.from_str("frequency")

    def test_str(self):
        assert str(SortOrder.KEY) == "key"


class TestCountConfig:
    """Test suite for CountConfig."""

    def test_defaults(self):
        config = CountConfig()
        assert config.sort_by is SortOrder.COUNT
        assert config.max_items is None
        assert config.input is None
        assert config.num_workers >= 1
        assert not config.verbose

    def test_sort_by_from_string(self):
        assert CountConfig(sort_by="Key").sort_by is SortOrder.KEY

    @pytest.mark.parametrize("max_items", [0, -3])
    def test_invalid_max_items(self, max_items):
        with pytest.raises(ValueError):
            CountConfig(max_items=max_items)

    def test_invalid_num_workers(self):
        with pytest.raises(ValueError):
            CountConfig(num_workers=0)

    def test_from_args(self):
        args = argparse.Namespace(
            sort_by=SortOrder.NONE, max_items=4, input="in.txt", num_workers=2, verbose=True
        )
        config = CountConfig.from_args(args)
        assert config == CountConfig(
            sort_by=SortOrder.NONE, max_items=4, input="in.txt", num_workers=2, verbose=True
        )
