#!/usr/bin/env python3
"""Entry point for ``python -m trishatter``."""

import sys

from trishatter.cli import main

if __name__ == '__main__':
    sys.exit(main())
