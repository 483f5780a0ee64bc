"""Loading of bibliography records."""

from .importers import BibtexImporter

__all__ = ["BibtexImporter"]
