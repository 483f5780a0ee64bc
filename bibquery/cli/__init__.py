"""Bibliography query CLI.

Command-line interface for searching bibliography files and locating
the files of their entries. Built with Click and Rich.
"""

from bibquery.cli.main import cli

__all__ = ["cli"]
