"""BibTeX importer using the core module's decoder."""

import logging
from pathlib import Path

from bibquery.core.bibtex import BibtexDecoder
from bibquery.core.models import Entry

logger = logging.getLogger(__name__)


class BibtexImporter:
    """Import entries from BibTeX format."""

    def __init__(self):
        self.decoder = BibtexDecoder()

    def import_file(self, path: Path) -> tuple[list[Entry], list[str]]:
        """Import from BibTeX file.

        Returns:
            Tuple of (entries, errors)
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return [], [f"Failed to read file: {e}"]
        return self.import_text(content)

    def import_text(self, text: str) -> tuple[list[Entry], list[str]]:
        """Import from BibTeX text.

        Entries keep their order in the text. When a citation key occurs
        twice, the first entry wins and the second is reported.

        Returns:
            Tuple of (entries, errors)
        """
        entries = []
        errors = []
        seen_keys: set[str] = set()

        for entry_dict in self.decoder.decode(text):
            entry = Entry.from_dict(entry_dict)

            if entry.key in seen_keys:
                errors.append(f"Entry {entry.key}: Skipped duplicate")
                continue

            if entry.key:
                seen_keys.add(entry.key)
            entries.append(entry)

        logger.debug("Imported %d entries (%d errors)", len(entries), len(errors))
        return entries, errors

    def import_batch(self, paths: list[Path]) -> tuple[list[Entry], list[str]]:
        """Import from multiple files."""
        all_entries = []
        all_errors = []

        for path in paths:
            entries, errors = self.import_file(path)
            all_entries.extend(entries)
            all_errors.extend(f"{path}: {error}" for error in errors)

        return all_entries, all_errors
