"""
Package entry point.

Allows running the application via:

    python -m myagenda

This simply forwards execution to myagenda.cli.main().
"""

from myagenda.cli import main

if __name__ == "__main__":
    main()
