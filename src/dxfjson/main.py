"""Main entry point for the dxfjson package.

This module provides the main entry point for the command-line interface.
"""

from .cli import main

if __name__ == "__main__":
    main()
