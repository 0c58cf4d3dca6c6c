"""Allow running cmakebridge as ``python -m cmakebridge``."""

import sys

from cmakebridge.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
