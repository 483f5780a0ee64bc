"""Search functionality for bibliographic records.

This module provides the query language (free text, ``field=value``
terms and ``and`` conjunction), its evaluation against records under
case-sensitivity and regular-expression flags, and the citation-key
based file finder.

Main components:
- DatabaseSearcher: Runs a SearchQuery over a record collection
- QueryParser / QueryEvaluator: Query language front and back end
- TermMatcher: Matching of a single term under the search flags
- CitationKeyBasedFileFinder: Files belonging to a citation key
"""

from ..core.models import SearchFlag
from .errors import PatternError, QueryError, SearchError
from .locate import (
    DEFAULT_APPENDIX_CHARACTERS,
    CitationKeyBasedFileFinder,
    FileLinkResult,
    FileLocator,
    FileScanError,
    clean_file_name,
)
from .matcher import PatternCache, TermMatcher, matches
from .query import (
    AndQuery,
    ParsedQuery,
    QueryEvaluator,
    QueryParser,
    QueryType,
    TermQuery,
    evaluate,
    parse,
)
from .searcher import DatabaseSearcher, SearchQuery, search

__all__ = [
    # Searching
    "DatabaseSearcher",
    "SearchQuery",
    "SearchFlag",
    "search",
    # Query language
    "QueryParser",
    "ParsedQuery",
    "QueryType",
    "TermQuery",
    "AndQuery",
    "parse",
    "QueryEvaluator",
    "evaluate",
    # Matching
    "TermMatcher",
    "PatternCache",
    "matches",
    # Errors
    "SearchError",
    "QueryError",
    "PatternError",
    # File finding
    "CitationKeyBasedFileFinder",
    "FileLocator",
    "FileLinkResult",
    "FileScanError",
    "DEFAULT_APPENDIX_CHARACTERS",
    "clean_file_name",
]
