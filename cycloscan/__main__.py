"""
Entry point for running cycloscan as a module.

Usage:
    python -m cycloscan analyze main.c
    python -m cycloscan --help
"""

import sys
from cycloscan.cli import main

if __name__ == "__main__":
    sys.exit(main())
