"""Main entry point for running splurge-enzyme-to-rtl as a module.

This allows users to run the CLI with:
    python -m splurge_enzyme_to_rtl [command] [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
