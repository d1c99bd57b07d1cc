"""Module entry point for running with python -m headinglinks."""

import sys

from headinglinks.cli import main

if __name__ == "__main__":
    sys.exit(main())
