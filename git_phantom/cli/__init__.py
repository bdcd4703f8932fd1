"""Command-line interface for git-phantom.

This package provides the CLI entry points and argument parsing.
"""

from .main import main, garden_main, ruins_main
from .args import build_parser

__all__ = ["main", "garden_main", "ruins_main", "build_parser"]
