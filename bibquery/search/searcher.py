"""Search over a collection of bibliographic records.

The searcher walks the collection once per call, evaluating the
parsed query against each record, and returns the matches in the
collection's own order. It keeps no state between calls and never
modifies the records, so one collection can be searched from several
threads as long as nobody mutates it meanwhile.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cached_property

from ..core.models import Record, SearchFlag
from .errors import PatternError
from .matcher import TermMatcher
from .query.evaluator import QueryEvaluator
from .query.parser import ParsedQuery, iter_terms, parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchQuery:
    """A query string together with the flags it is run under."""

    query: str
    flags: SearchFlag = SearchFlag(0)

    @cached_property
    def parsed(self) -> ParsedQuery:
        """The parsed query, built once per instance."""
        return parse(self.query)

    @property
    def is_case_sensitive(self) -> bool:
        return SearchFlag.CASE_SENSITIVE in self.flags

    @property
    def is_regular_expression(self) -> bool:
        return SearchFlag.REGULAR_EXPRESSION in self.flags

    @property
    def is_blank(self) -> bool:
        return not self.query.strip()

    @cached_property
    def error(self) -> PatternError | None:
        """The pattern error that makes this query unusable, if any."""
        if not self.is_regular_expression:
            return None

        matcher = TermMatcher(self.flags)
        for term in iter_terms(self.parsed):
            if not term.value:
                continue
            try:
                matcher.compile(term.value)
            except PatternError as e:
                return e
        return None

    def is_valid(self) -> bool:
        """Check whether the query can be evaluated meaningfully."""
        return not self.is_blank and self.error is None

    def describe(self) -> str:
        """Describe the search in one line."""
        sensitivity = "case-sensitive" if self.is_case_sensitive else "case-insensitive"
        mode = "regular-expression" if self.is_regular_expression else "plain-text"
        return f'{sensitivity} {mode} search for "{self.query.strip()}"'

    def __str__(self) -> str:
        return self.query


class DatabaseSearcher:
    """Find the records of a collection that match a query."""

    def __init__(self, query: SearchQuery, records: Iterable[Record]):
        """Initialize searcher.

        Args:
            query: Query and flags to search with
            records: Record collection; it must be re-iterable for repeated
                calls to give the same answer
        """
        self.query = query
        self.records = records

    def get_matches(self) -> list[Record]:
        """Get all matching records in collection order.

        An invalid query yields no matches; the reason is available on
        ``query.error``.
        """
        if self.query.is_blank:
            logger.debug("Empty query matches no records")
            return []

        if self.query.error is not None:
            logger.warning("Search aborted: %s", self.query.error)
            return []

        evaluator = QueryEvaluator(self.query.flags)
        parsed = self.query.parsed

        try:
            matches = [
                record for record in self.records if evaluator.evaluate(parsed, record)
            ]
        except PatternError as e:
            logger.warning("Search aborted: %s", e)
            return []

        logger.debug("%s matched %d records", self.query.describe(), len(matches))
        return matches

    def count(self) -> int:
        """Count the matching records."""
        return len(self.get_matches())


def search(
    query: str,
    flags: SearchFlag = SearchFlag(0),
    records: Iterable[Record] = (),
) -> list[Record]:
    """Search records for a raw query string.

    Args:
        query: Raw query string
        flags: Search flags
        records: Record collection

    Returns:
        Matching records in collection order
    """
    return DatabaseSearcher(SearchQuery(query, flags), records).get_matches()
