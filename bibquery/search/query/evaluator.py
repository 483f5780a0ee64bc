"""Evaluation of parsed queries against single records."""

from ...core.models import Record, SearchFlag
from ..matcher import PatternCache, TermMatcher
from .parser import AndQuery, ParsedQuery, TermQuery


class QueryEvaluator:
    """Evaluate parsed queries against records.

    One evaluator serves one search: it owns the pattern cache, so a
    regular expression is compiled once no matter how many records
    are checked.
    """

    def __init__(self, flags: SearchFlag = SearchFlag(0)):
        self.flags = flags
        self.matcher = TermMatcher(flags)

    def evaluate(self, query: ParsedQuery, record: Record) -> bool:
        """Check whether a record satisfies a query.

        Raises:
            PatternError: If a term is an invalid regular expression
            TypeError: If the query contains an unknown node type
        """
        if isinstance(query, TermQuery):
            return self._evaluate_term(query, record)
        if isinstance(query, AndQuery):
            return self.evaluate(query.left, record) and self.evaluate(
                query.right, record
            )
        raise TypeError(f"Unknown query node: {type(query).__name__}")

    def _evaluate_term(self, term: TermQuery, record: Record) -> bool:
        # An empty term carries no meaning and matches nothing
        if not term.value:
            return False

        if term.field is None:
            return any(
                self.matcher.matches(value, term.value)
                for value in record.all_values()
            )

        value = record.field_value(term.field)
        if value is None:
            return False
        return self.matcher.matches(value, term.value)


def evaluate(
    query: ParsedQuery,
    record: Record,
    flags: SearchFlag = SearchFlag(0),
    cache: PatternCache | None = None,
) -> bool:
    """Evaluate a query against one record.

    Args:
        query: Parsed query
        record: Record to check
        flags: Active search flags
        cache: Pattern cache of the surrounding search, if any

    Returns:
        True if the record matches
    """
    evaluator = QueryEvaluator(flags)
    if cache is not None:
        if cache.flags != flags:
            raise ValueError("Pattern cache was created for different flags")
        evaluator.matcher.cache = cache
    return evaluator.evaluate(query, record)
