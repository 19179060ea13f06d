"""Allow ``python -m beatsync``."""

import sys

from beatsync.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
