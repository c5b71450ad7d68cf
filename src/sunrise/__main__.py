"""Allow running Sunrise with ``python -m sunrise``."""

import sys

from sunrise.cli import main

if __name__ == "__main__":
    sys.exit(main())
