"""Module entry point for running with python -m otl2latex."""

import sys

from otl2latex.cli import main

if __name__ == "__main__":
    sys.exit(main())
