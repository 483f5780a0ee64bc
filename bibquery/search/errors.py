"""Search error types."""


class SearchError(Exception):
    """Base exception for search-related errors."""


class QueryError(SearchError):
    """Error during query parsing or execution."""


class PatternError(QueryError):
    """Invalid regular expression in a regular-expression search."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regular expression {pattern!r}: {reason}")
