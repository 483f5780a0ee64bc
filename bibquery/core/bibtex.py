"""BibTeX decoding.

This module turns BibTeX text into flat entry dictionaries that
``Entry.from_dict`` accepts. It handles nested braces, quoted and bare
field values, comments and the non-entry blocks (@string, @comment,
@preamble), which are skipped.
"""

import re
from typing import Any

NON_ENTRY_TYPES = frozenset({"string", "comment", "preamble"})


class BibtexDecoder:
    """Parse BibTeX format into entry dictionaries.

    Supports up to 3 levels of brace nesting for complex field values.
    """

    ENTRY_PATTERN = re.compile(
        r"@(\w+)\s*\{([^,{}]+),\s*((?:[^{}]|{(?:[^{}]|{(?:[^{}]|{(?:[^{}]|{[^{}]*})*})*})*})*)\s*\}",
        re.DOTALL | re.MULTILINE,
    )

    STRING_PATTERN = re.compile(
        r'@string\s*\{\s*(\w+)\s*=\s*"([^"]*?)"\s*\}',
        re.IGNORECASE | re.MULTILINE,
    )

    FIELD_PATTERN = re.compile(
        r'(\w+)\s*=\s*(?:"([^"]*?)"|{((?:[^{}]|{(?:[^{}]|{(?:[^{}]|{[^{}]*})*})*})*)}|([^,}]+?))\s*(?:,|$)',
        re.MULTILINE,
    )

    UNESCAPE_MAP = {
        "\\\\": "\\",  # Backslash
        "\\$": "$",
        "\\&": "&",
        "\\#": "#",
        "\\_": "_",
        "\\%": "%",
        "\\~{}": "~",
        "\\^{}": "^",
    }

    @classmethod
    def unescape(cls, text: str) -> str:
        """Unescape LaTeX special characters.

        Args:
            text: Text with escaped characters.

        Returns:
            Text with special characters unescaped.
        """
        if not text:
            return text

        result = text
        for escaped, char in sorted(cls.UNESCAPE_MAP.items(), key=len, reverse=True):
            result = result.replace(escaped, char)
        return result

    @classmethod
    def decode(cls, bibtex_str: str) -> list[dict[str, Any]]:
        """Decode BibTeX string to list of entry dictionaries.

        Each dictionary holds ``type`` and ``key`` plus one item per
        field, with lowercase field names. Whitespace runs inside values
        (line breaks in long titles) collapse to single spaces.

        Args:
            bibtex_str: BibTeX format string.

        Returns:
            List of dictionaries representing parsed entries, in file order.
        """
        entries = []

        bibtex_str = bibtex_str.replace(r"\%", "\x00PERCENT\x00")
        bibtex_str = re.sub(r"%.*$", "", bibtex_str, flags=re.MULTILINE)
        bibtex_str = bibtex_str.replace("\x00PERCENT\x00", r"\%")

        bibtex_str = cls.STRING_PATTERN.sub("", bibtex_str)

        for match in cls.ENTRY_PATTERN.finditer(bibtex_str):
            entry_type = match.group(1).lower()
            if entry_type in NON_ENTRY_TYPES:
                continue

            entry_key = match.group(2).strip()
            fields_str = match.group(3)

            entry: dict[str, Any] = {"type": entry_type, "key": entry_key}

            for field_match in cls.FIELD_PATTERN.finditer(fields_str):
                field_name = field_match.group(1).lower()
                if field_name in ("key", "type"):
                    # would shadow the entry's own key and type
                    field_name = f"{field_name}_"

                value = (
                    field_match.group(2)
                    or field_match.group(3)
                    or field_match.group(4)
                    or ""
                ).strip()

                entry[field_name] = cls.unescape(" ".join(value.split()))

            entries.append(entry)

        return entries
