"""Bibliography import formats.

Records are owned by the host application; these importers only turn
bibliography files into in-memory entries for searching.
"""

from .bibtex import BibtexImporter

__all__ = [
    "BibtexImporter",
]
