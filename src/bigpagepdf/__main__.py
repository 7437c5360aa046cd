#!/usr/bin/env python3
"""
BigPagePdf - Entry point for python -m bigpagepdf

This module allows the package to be run as a module:
    python -m bigpagepdf
"""

import sys

from bigpagepdf import main

if __name__ == "__main__":
    sys.exit(main())
