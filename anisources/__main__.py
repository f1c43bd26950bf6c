"""
anisources Main Entry Point - Package execution entry point.

This module allows the package to be executed directly with:
python -m anisources
"""

from anisources.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
