"""Query parsing and evaluation subsystem."""

from .evaluator import QueryEvaluator, evaluate
from .parser import (
    AndQuery,
    ParsedQuery,
    QueryParser,
    QueryType,
    TermQuery,
    iter_terms,
    parse,
)

__all__ = [
    "QueryParser",
    "ParsedQuery",
    "QueryType",
    "TermQuery",
    "AndQuery",
    "iter_terms",
    "parse",
    "QueryEvaluator",
    "evaluate",
]
