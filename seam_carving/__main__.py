"""Allow ``python -m seam_carving``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
