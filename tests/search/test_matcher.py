"""Tests for single-term matching."""

import re

import pytest

from bibquery.core.models import SearchFlag
from bibquery.search.errors import PatternError, QueryError, SearchError
from bibquery.search.matcher import (
    PatternCache,
    TermMatcher,
    compile_pattern,
    matches,
)

NO_FLAGS = SearchFlag(0)
CASE = SearchFlag.CASE_SENSITIVE
REGEX = SearchFlag.REGULAR_EXPRESSION


class TestLiteralMatching:
    """Test substring matching without REGULAR_EXPRESSION."""

    @pytest.mark.parametrize("candidate", ["Test", "test", "tESt", "TEST", "A test case"])
    def test_case_insensitive_by_default(self, candidate):
        """Default matching ignores case on both sides."""
        assert matches(candidate, "Test", NO_FLAGS)
        assert matches(candidate, "tEST", NO_FLAGS)

    def test_substring_semantics(self):
        """The pattern may occur anywhere in the candidate."""
        assert matches("The TeXbook", "xbo", NO_FLAGS)
        assert not matches("The TeXbook", "Best", NO_FLAGS)

    def test_case_sensitive_requires_exact_case(self):
        """CASE_SENSITIVE compares characters exactly."""
        assert matches("Test", "Test", CASE)
        assert not matches("test", "Test", CASE)
        assert not matches("Test", "TesT", CASE)

    def test_regex_metacharacters_are_literal(self):
        """Without REGULAR_EXPRESSION, metacharacters have no meaning."""
        assert matches("192? title.", "2? t", NO_FLAGS)
        assert not matches("1920 title", "192?", NO_FLAGS)

    def test_casefold_handles_special_cases(self):
        """Case folding covers more than ASCII."""
        assert matches("Straße", "STRASSE", NO_FLAGS)


class TestRegexMatching:
    """Test matching with REGULAR_EXPRESSION."""

    def test_find_not_full_match(self):
        """The pattern is searched for, not matched against the whole text."""
        assert matches("A Case study", r"\bCase\b", REGEX | CASE)

    def test_character_class(self):
        """A character class matches any of its characters."""
        assert matches("192? title.", "[/9]", REGEX)
        assert not matches("192? title.", "[/8]", REGEX)

    def test_case_insensitive_regex(self):
        """Regexes ignore case unless CASE_SENSITIVE is set."""
        assert matches("CASE", r"\bcase\b", REGEX)
        assert not matches("CASE", r"\bcase\b", REGEX | CASE)

    def test_word_boundary_rejects_partial_word(self):
        """Word boundaries keep their meaning."""
        assert not matches("Case", r"\bCas\b", REGEX | CASE)

    def test_invalid_pattern_raises_pattern_error(self):
        """Invalid regexes raise PatternError."""
        with pytest.raises(PatternError) as exc_info:
            matches("anything", "[unclosed", REGEX)

        assert exc_info.value.pattern == "[unclosed"
        assert isinstance(exc_info.value, QueryError)
        assert isinstance(exc_info.value, SearchError)
        assert isinstance(exc_info.value.__cause__, re.error)

    def test_invalid_pattern_is_fine_without_regex_flag(self):
        """The same text is a harmless literal in plain mode."""
        assert matches("a [unclosed bracket", "[unclosed", NO_FLAGS)


class TestPatternCache:
    """Test the per-search pattern cache."""

    def test_compiles_once(self):
        """A pattern is compiled once and reused."""
        cache = PatternCache(REGEX)

        first = cache.compile("te.t")
        second = cache.compile("te.t")

        assert first is second
        assert len(cache) == 1
        assert "te.t" in cache

    def test_compiled_pattern_follows_flags(self):
        """Case sensitivity is baked into the compiled pattern."""
        insensitive = PatternCache(REGEX).compile("test")
        sensitive = PatternCache(REGEX | CASE).compile("test")

        assert insensitive.flags & re.IGNORECASE
        assert not sensitive.flags & re.IGNORECASE

    def test_rejects_other_flags(self):
        """A cache cannot be reused for a search with different flags."""
        cache = PatternCache(REGEX)

        with pytest.raises(ValueError):
            cache.compile("test", REGEX | CASE)

    def test_matches_uses_cache(self):
        """matches() stores compiled patterns in a given cache."""
        cache = PatternCache(REGEX)

        assert matches("Test", "t.st", REGEX, cache)
        assert "t.st" in cache

    def test_invalid_pattern_not_cached(self):
        """Failed compilations leave no entry behind."""
        cache = PatternCache(REGEX)

        with pytest.raises(PatternError):
            cache.compile("(")
        assert len(cache) == 0


class TestTermMatcher:
    """Test the flag-bound matcher."""

    def test_each_matcher_has_own_cache(self):
        """Matchers never share caches."""
        first = TermMatcher(REGEX)
        second = TermMatcher(REGEX)

        first.matches("Test", "t.st")

        assert len(first.cache) == 1
        assert len(second.cache) == 0

    def test_compile_returns_none_for_literal_search(self):
        """Literal searches have nothing to compile."""
        assert TermMatcher(NO_FLAGS).compile("[") is None

    def test_compile_validates_regex(self):
        """compile() surfaces invalid regexes early."""
        with pytest.raises(PatternError):
            TermMatcher(REGEX).compile("*oops")

    def test_compile_pattern_helper(self):
        """compile_pattern works without a cache."""
        assert compile_pattern("a+", REGEX).search("caat")
