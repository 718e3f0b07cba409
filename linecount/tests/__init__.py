"""
Copyright (c) 2025. All rights reserved.
"""

"""
Test suite for linecount.

Covers record extraction, frequency counting, ranking strategies, report
emission and the command line entry point.
"""
