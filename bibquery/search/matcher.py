"""Single-term matching under a set of search flags."""

from __future__ import annotations

import re

from ..core.models import SearchFlag
from .errors import PatternError


class PatternCache:
    """Compiled regular expressions for one search invocation.

    The cache is bound to the flags it was created with, because a
    pattern compiled case-insensitively cannot be reused for a
    case-sensitive search. Create a new cache for every search.
    """

    def __init__(self, flags: SearchFlag):
        self.flags = flags
        self._compiled: dict[str, re.Pattern[str]] = {}

    def __len__(self) -> int:
        return len(self._compiled)

    def __contains__(self, pattern: str) -> bool:
        return pattern in self._compiled

    def compile(self, pattern: str, flags: SearchFlag | None = None) -> re.Pattern[str]:
        """Compile a pattern, reusing an earlier compilation.

        Raises:
            PatternError: If the pattern is not a valid regular expression
            ValueError: If called with flags other than the cache's own
        """
        if flags is not None and flags != self.flags:
            raise ValueError(
                f"Pattern cache bound to {self.flags!r} cannot compile for {flags!r}"
            )

        compiled = self._compiled.get(pattern)
        if compiled is None:
            compiled = compile_pattern(pattern, self.flags)
            self._compiled[pattern] = compiled
        return compiled


def compile_pattern(pattern: str, flags: SearchFlag) -> re.Pattern[str]:
    """Compile a search pattern according to the flags.

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    re_flags = 0 if SearchFlag.CASE_SENSITIVE in flags else re.IGNORECASE
    try:
        return re.compile(pattern, re_flags)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def matches(
    candidate: str,
    pattern: str,
    flags: SearchFlag,
    cache: PatternCache | None = None,
) -> bool:
    """Check whether candidate text satisfies a single pattern.

    With REGULAR_EXPRESSION the pattern is searched for anywhere in the
    candidate (find, not full match). Otherwise the pattern must occur
    as a substring. Both modes ignore case unless CASE_SENSITIVE is set.

    Args:
        candidate: Text taken from a record field
        pattern: Literal text or regular expression from the query
        flags: Active search flags
        cache: Optional per-search cache of compiled patterns

    Returns:
        True if the candidate matches

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    if SearchFlag.REGULAR_EXPRESSION in flags:
        if cache is not None:
            regex = cache.compile(pattern, flags)
        else:
            regex = compile_pattern(pattern, flags)
        return regex.search(candidate) is not None

    if SearchFlag.CASE_SENSITIVE in flags:
        return pattern in candidate
    return pattern.casefold() in candidate.casefold()


class TermMatcher:
    """Matcher bound to one search's flags and pattern cache."""

    def __init__(self, flags: SearchFlag = SearchFlag(0)):
        self.flags = flags
        self.cache = PatternCache(flags)

    @property
    def is_regex(self) -> bool:
        return SearchFlag.REGULAR_EXPRESSION in self.flags

    def matches(self, candidate: str, pattern: str) -> bool:
        """Check candidate text against a pattern."""
        return matches(candidate, pattern, self.flags, self.cache)

    def compile(self, pattern: str) -> re.Pattern[str] | None:
        """Compile a pattern ahead of matching.

        Returns None for literal (non-regex) searches.

        Raises:
            PatternError: If the pattern is not a valid regular expression
        """
        if not self.is_regex:
            return None
        return self.cache.compile(pattern)
