"""
Entry point for running terramech as a module.

Usage:
    python -m terramech analyze --input example.json
    python -m terramech make-example
    python -m terramech serve --port 8000
"""

import sys

from terramech.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
