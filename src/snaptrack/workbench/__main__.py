"""Entry point for ``python -m snaptrack.workbench``."""

import sys

from .program import main

if __name__ == "__main__":
    sys.exit(main())
