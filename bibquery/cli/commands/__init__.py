"""CLI commands module."""

from . import files, search

__all__ = [
    "files",
    "search",
]
