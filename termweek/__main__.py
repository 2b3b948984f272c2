"""
Package entry point.

Allows running the application via:

    python -m termweek

This simply forwards execution to termweek.cli.main().
"""

from termweek.cli import main

if __name__ == "__main__":
    main()
