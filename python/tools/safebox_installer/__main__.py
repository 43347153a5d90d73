"""
Command line entry point for the safebox installer.
This allows running the module as: python -m safebox_installer
"""

from .cli import main
import sys

if __name__ == "__main__":
    sys.exit(main())
