"""Entry point for ``python -m sheet_translator``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
