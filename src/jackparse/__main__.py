"""
Entry point for running jackparse as a module.

Usage:
    python -m jackparse parse MainT.xml
"""

import sys

from jackparse.cli import main

if __name__ == "__main__":
    sys.exit(main())
