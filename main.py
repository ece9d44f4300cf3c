#!/usr/bin/env python3
"""
MySh - A small POSIX command interpreter

This is the source-tree launcher for MySh; an installed copy provides the
``mysh`` console script instead.

Usage:
    python main.py            # interactive when stdin is a terminal
    python main.py script     # run each line of a script file
"""

import sys
import os

# Ensure the mysh package is importable from a source checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mysh.main import main


if __name__ == '__main__':
    sys.exit(main())
