#!/usr/bin/env python3
"""
gitlane - commit graph layout for a desktop Git client

This is a convenience wrapper for running from the repo root.
The actual entry point is gitlane.main:main (for pip install).
"""

import sys

from gitlane.main import main

if __name__ == "__main__":
    sys.exit(main())
