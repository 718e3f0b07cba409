"""
Copyright (c) 2025. All rights reserved.
"""

import sys

from .cli import main

sys.exit(main())
