"""
Package entry point for python -m execution.

USAGE:
    python -m focus_stats                      # Show all-time statistics
    python -m focus_stats show --period 7days  # Show last 7 days
    python -m focus_stats list                 # List sessions
    python -m focus_stats dashboard            # Launch web dashboard
"""

import sys

from focus_stats.cli import main

if __name__ == "__main__":
    sys.exit(main())
