"""
Entry point for running hdfcompat as a module.

Usage:
    python -m hdfcompat [command] [options]

This allows hdfcompat to be executed directly as a Python module,
which is useful for development and testing without installing
the package.
"""

from hdfcompat.cli import main

if __name__ == "__main__":
    main()
