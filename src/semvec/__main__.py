#!/usr/bin/env python3
"""Entry point for running the CLI as a module.

Usage:
    python -m semvec build --index ./corpus
    python -m semvec lsa --index ./corpus
"""

import sys

from semvec.cli import main

if __name__ == "__main__":
    sys.exit(main())
