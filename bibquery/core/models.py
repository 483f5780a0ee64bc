"""Core data models for bibliographic records.

This module defines the record abstraction the search core works
against, plus the concrete map-backed Entry used by the importers,
the CLI and the tests.

Key components:
- Record: capability protocol (field lookup and value enumeration)
- Entry: immutable, map-backed bibliography entry
- SearchFlag: search modifiers (case sensitivity, regex mode)
"""

from collections.abc import Iterable, Iterator
from enum import Flag, auto
from typing import Any, Protocol, runtime_checkable

import msgspec


class SearchFlag(Flag):
    """Search modifiers.

    ``SearchFlag(0)`` means the default behavior: case-insensitive
    literal substring matching.
    """

    CASE_SENSITIVE = auto()
    REGULAR_EXPRESSION = auto()

    @classmethod
    def from_options(
        cls, case_sensitive: bool = False, regex: bool = False
    ) -> "SearchFlag":
        """Build a flag set from boolean options."""
        flags = cls(0)
        if case_sensitive:
            flags |= cls.CASE_SENSITIVE
        if regex:
            flags |= cls.REGULAR_EXPRESSION
        return flags


@runtime_checkable
class Record(Protocol):
    """Anything the searcher can read fields from.

    Field names are case-insensitive. ``key`` is the citation key and
    may be None.
    """

    @property
    def key(self) -> str | None: ...

    def field_value(self, name: str) -> str | None: ...

    def all_values(self) -> Iterable[str]: ...


class Entry(msgspec.Struct, frozen=True, kw_only=True):
    """Immutable bibliography entry.

    Fields are stored in a flat name -> value mapping with lowercase
    names, in the order they were given. The citation key is kept
    apart from the fields: it identifies the entry rather than
    describing it.

    Field names are lowercased however the entry is built, including
    direct construction and msgspec decoding.
    """

    key: str | None = None
    type: str = "misc"
    fields: dict[str, str] = msgspec.field(default_factory=dict)

    def __post_init__(self):
        # frozen, so normalize the mapping in place
        if any(name != name.lower() for name in self.fields):
            normalized = {name.lower(): value for name, value in self.fields.items()}
            self.fields.clear()
            self.fields.update(normalized)

    @classmethod
    def create(
        cls, key: str | None = None, type: str = "misc", **fields: Any
    ) -> "Entry":
        """Create an entry from keyword fields.

        None values are dropped and everything else is stored as text.
        """
        values = {
            name.lower(): str(value)
            for name, value in fields.items()
            if value is not None
        }
        return cls(key=key, type=type.lower(), fields=values)

    def field_value(self, name: str) -> str | None:
        """Get a field's value, or None when the entry lacks it."""
        return self.fields.get(name.lower())

    def all_values(self) -> Iterator[str]:
        """Iterate over all field values in insertion order."""
        return iter(self.fields.values())

    def has_field(self, name: str) -> bool:
        """Check whether the entry has a field."""
        return name.lower() in self.fields

    @property
    def field_names(self) -> tuple[str, ...]:
        """Lowercase names of all fields present."""
        return tuple(self.fields)

    def with_field(self, name: str, value: str) -> "Entry":
        """Return a copy of this entry with one field set."""
        updated = dict(self.fields)
        updated[name.lower()] = value
        return msgspec.structs.replace(self, fields=updated)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary.

        Returns:
            Dictionary with ``key`` and ``type`` next to the fields.
        """
        data: dict[str, Any] = {"type": self.type}
        if self.key is not None:
            data["key"] = self.key
        data.update(self.fields)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Entry":
        """Create Entry from a flat dictionary representation.

        Args:
            data: Dictionary with optional ``key`` and ``type`` items;
                every other item becomes a field.

        Returns:
            New Entry instance.
        """
        values = {
            str(name).lower(): str(value)
            for name, value in data.items()
            if name not in ("key", "type") and value is not None
        }
        return cls(
            key=data.get("key"),
            type=str(data.get("type", "misc")).lower(),
            fields=values,
        )
