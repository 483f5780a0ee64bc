"""Core domain models for bibliographic records."""

from bibquery.core.bibtex import BibtexDecoder
from bibquery.core.models import Entry, Record, SearchFlag

__all__ = [
    "BibtexDecoder",
    "Entry",
    "Record",
    "SearchFlag",
]
