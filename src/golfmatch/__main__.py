"""
Main entry point for the golf booking application.
"""

import sys

from golfmatch.cli import main

if __name__ == "__main__":
    sys.exit(main())
