"""Shared fixtures for search module tests."""

import pytest

from bibquery.core.models import Entry


@pytest.fixture
def library_a() -> list[Entry]:
    """Five entries whose author and title differ only in letter case."""
    return [
        Entry.create(key="entry1", author="Test", title="cASe"),
        Entry.create(key="entry2", author="test", title="casE"),
        Entry.create(key="entry3", author="tESt", title="Case"),
        Entry.create(key="entry4", author="tesT", title="CASE"),
        Entry.create(key="entry5", author="TEST", title="case"),
    ]


@pytest.fixture
def library_b() -> list[Entry]:
    """Entries with mixed content, one with regex metacharacters in its title."""
    return [
        Entry.create(key="entry1", author="Test", title="Case"),
        Entry.create(key="entry2", author="User", title="case"),
        Entry.create(key="entry3", author="test", title="text"),
        Entry.create(key="entry4", author="Special", title="192? title."),
    ]


@pytest.fixture
def sample_entries() -> list[Entry]:
    """Realistic entries for search testing."""
    return [
        Entry.create(
            key="knuth1984",
            type="article",
            author="Donald E. Knuth",
            title="The TeXbook",
            journal="Computers & Typesetting",
            year=1984,
        ),
        Entry.create(
            key="lamport1994",
            type="book",
            author="Leslie Lamport",
            title="LaTeX: A Document Preparation System",
            publisher="Addison-Wesley",
            year=1994,
        ),
        Entry.create(
            key="turing1950",
            type="article",
            author="Alan M. Turing",
            title="Computing Machinery and Intelligence",
            journal="Mind",
            year=1950,
            pages="433--460",
        ),
        Entry.create(
            key="shannon1948",
            type="article",
            author="Claude E. Shannon",
            title="A Mathematical Theory of Communication",
            journal="Bell System Technical Journal",
            year=1948,
        ),
    ]
