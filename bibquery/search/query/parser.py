"""Query parser for search queries.

Query syntax:
- Free text: ``quantum`` matches any field containing the text
- Field search: ``author=Knuth`` matches only the author field
- Conjunction: ``author=Knuth and title=TeX`` (lowercase ``and`` only)
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum


class QueryType(Enum):
    """Types of search queries."""

    TERM = "term"
    AND = "and"


@dataclass(frozen=True)
class ParsedQuery(ABC):
    """Base class for parsed query objects."""

    @property
    @abstractmethod
    def query_type(self) -> QueryType:
        """Get the query type."""
        pass

    @abstractmethod
    def to_string(self) -> str:
        """Convert query back to string representation."""
        pass

    @abstractmethod
    def get_terms(self) -> list[str]:
        """Get all search terms from the query."""
        pass


@dataclass(frozen=True)
class TermQuery(ParsedQuery):
    """Single term, either free text or restricted to one field."""

    value: str
    field: str | None = None

    @property
    def query_type(self) -> QueryType:
        return QueryType.TERM

    @property
    def is_free_text(self) -> bool:
        return self.field is None

    def to_string(self) -> str:
        if self.field is None:
            return self.value
        return f"{self.field}={self.value}"

    def get_terms(self) -> list[str]:
        return [self.value]


@dataclass(frozen=True)
class AndQuery(ParsedQuery):
    """Conjunction of two queries."""

    left: ParsedQuery
    right: ParsedQuery

    @property
    def query_type(self) -> QueryType:
        return QueryType.AND

    def to_string(self) -> str:
        return f"{self.left.to_string()} and {self.right.to_string()}"

    def get_terms(self) -> list[str]:
        return self.left.get_terms() + self.right.get_terms()


def iter_terms(query: ParsedQuery) -> Iterator[TermQuery]:
    """Yield the leaf terms of a query from left to right."""
    if isinstance(query, TermQuery):
        yield query
    elif isinstance(query, AndQuery):
        yield from iter_terms(query.left)
        yield from iter_terms(query.right)
    else:
        raise TypeError(f"Unknown query node: {type(query).__name__}")


class QueryParser:
    """Parser for search query strings.

    Parsing never fails: any string produces a query. Invalid regular
    expressions are only detected when the query is evaluated.
    """

    def __init__(self):
        self.and_pattern = re.compile(r"\s+and\s+")
        self.field_pattern = re.compile(r"^(\w+)\s*=\s*(.*)$", re.DOTALL)

    def parse(self, query_string: str) -> ParsedQuery:
        """Parse a query string into a structured query.

        Args:
            query_string: Raw query string from user

        Returns:
            ParsedQuery object representing the query
        """
        if not query_string or not query_string.strip():
            return TermQuery("")

        clauses = self.and_pattern.split(query_string.strip())

        query = self._parse_clause(clauses[0])
        for clause in clauses[1:]:
            query = AndQuery(query, self._parse_clause(clause))
        return query

    def _parse_clause(self, clause: str) -> TermQuery:
        """Parse one conjunct, e.g. 'author=Knuth' or 'Knuth'."""
        clause = clause.strip()

        match = self.field_pattern.match(clause)
        if match:
            return TermQuery(match.group(2).strip(), field=match.group(1).lower())

        return TermQuery(clause)

    def extract_field_queries(self, query: ParsedQuery) -> dict[str, list[str]]:
        """Extract all field-qualified values from a parsed query.

        Args:
            query: Parsed query to analyze

        Returns:
            Dictionary mapping field names to the values queried for them
        """
        field_queries: dict[str, list[str]] = {}

        for term in iter_terms(query):
            if term.field is not None:
                field_queries.setdefault(term.field, []).append(term.value)

        return field_queries

    def validate_query(self, query: ParsedQuery) -> list[str]:
        """Validate a parsed query and return any issues.

        Args:
            query: Parsed query to validate

        Returns:
            List of validation warnings
        """
        errors = []

        for term in iter_terms(query):
            if term.value:
                continue
            if term.field is None:
                errors.append("Empty term in query")
            else:
                errors.append(f"Empty value for field '{term.field}'")

        return errors


_default_parser = QueryParser()


def parse(query_string: str) -> ParsedQuery:
    """Parse a query string with the default parser."""
    return _default_parser.parse(query_string)
