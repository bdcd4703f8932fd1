"""Utility functions for git-phantom.

This package provides utility modules:
- logging: Logging configuration and logger creation
"""

from .logging import setup_logging, get_logger

__all__ = [
    "setup_logging",
    "get_logger",
]
