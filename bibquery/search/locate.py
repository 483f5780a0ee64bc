"""File location functionality for bibliography entries.

This module finds the files (PDFs, notes, supplements) that belong to
an entry by comparing file names against the entry's citation key.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..core.models import Record

logger = logging.getLogger(__name__)

DEFAULT_APPENDIX_CHARACTERS = "abcdefghijklmnopqrstuvwxyz"

# Characters that cannot appear in a file name on common file systems
_ILLEGAL_FILENAME_CHARACTERS = frozenset('/\\:*?"<>|')


class FileScanError(OSError):
    """A directory could not be scanned."""

    def __init__(self, directory: Path, cause: OSError):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Problem in finding files under {directory}: {cause}")


def clean_file_name(name: str) -> str:
    """Make a string safe to use as a file name.

    Illegal characters are replaced by underscores, one for one, so
    the cleaned name keeps the original length (before trimming).
    """
    if name.endswith("."):
        name = name[:-1]

    cleaned = "".join(
        "_" if ord(char) < 32 or char in _ILLEGAL_FILENAME_CHARACTERS else char
        for char in name
    )
    return cleaned.strip()


def get_file_extension(path: Path | str) -> str:
    """Get the extension of a file name without the dot.

    Returns an empty string when the name has no dot.
    """
    name = Path(path).name
    _, dot, extension = name.rpartition(".")
    return extension if dot else ""


def get_base_name(path: Path | str) -> str:
    """Get a file name without its extension."""
    name = Path(path).name
    base, dot, _ = name.rpartition(".")
    return base if dot else name


def _unique_files(paths: list[Path]) -> list[Path]:
    """Drop paths that name a file already listed (links, hard links)."""
    seen: set[tuple[int, int]] = set()
    result = []
    for path in paths:
        try:
            stat = path.stat()
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            result.append(path)
            continue
        identity = (stat.st_dev, stat.st_ino)
        if identity not in seen:
            seen.add(identity)
            result.append(path)
    return result


@dataclass
class FileLinkResult:
    """Files found for a single entry."""

    entry_key: str | None
    files: list[Path]
    directories: list[Path] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.files)


class CitationKeyBasedFileFinder:
    """Find files whose names start with an entry's citation key.

    A file belongs to key ``Smith2020`` if its base name is exactly
    ``Smith2020``, or (unless ``exact_key_only``) if it starts with the
    key followed by something other than an appendix character. So
    ``Smith2020_supplement.pdf`` matches while ``Smith2020a.pdf`` does
    not: the latter is the file of another entry whose key was
    disambiguated with an appended letter.
    """

    def __init__(
        self,
        exact_key_only: bool = False,
        appendix_characters: str = DEFAULT_APPENDIX_CHARACTERS,
    ):
        """Initialize finder.

        Args:
            exact_key_only: Only accept base names equal to the key
            appendix_characters: Characters used to disambiguate keys
        """
        self.exact_key_only = exact_key_only
        self.appendix_characters = frozenset(appendix_characters)

    def find_associated_files(
        self,
        entry: Record | str | None,
        directories: list[Path],
        extensions: list[str] | set[str],
    ) -> list[Path]:
        """Find files associated with an entry.

        Args:
            entry: Entry (its citation key is used) or a citation key
            directories: Directories to search recursively
            extensions: Accepted extensions without leading dot

        Returns:
            Sorted list of matching files

        Raises:
            FileScanError: If an existing directory cannot be scanned
        """
        key = entry if isinstance(entry, str) or entry is None else entry.key
        if key is None or not key.strip():
            logger.debug("No citation key found in entry %s", entry)
            return []

        exact = []
        partial = []
        for file in self.find_files_by_extension(directories, extensions):
            base_name = get_base_name(file)

            if base_name == key:
                logger.debug("Found exact match for key %s in file %s", key, file)
                exact.append(file)
                continue

            if not self.exact_key_only and self._matches(base_name, key):
                logger.debug("Found non-exact match for key %s in file %s", key, file)
                partial.append(file)

        return sorted(_unique_files(exact + partial))

    def _matches(self, base_name: str, key: str) -> bool:
        cleaned_key = clean_file_name(key)
        if not cleaned_key or not base_name.startswith(cleaned_key):
            return False

        if len(base_name) == len(cleaned_key):
            return True
        return base_name[len(cleaned_key)] not in self.appendix_characters

    def find_files_by_extension(
        self,
        directories: list[Path],
        extensions: list[str] | set[str],
    ) -> list[Path]:
        """List all files under the directories with an accepted extension.

        Directories that do not exist are skipped. Overlapping
        directories list each path once. Links and other names for the
        same file are all listed.

        Raises:
            FileScanError: If an existing directory cannot be scanned
        """
        accepted = set(extensions)
        seen: set[Path] = set()
        result = []

        for directory in directories:
            directory = Path(directory)
            if not directory.is_dir():
                continue

            for path in self._walk(directory):
                if get_file_extension(path) not in accepted or path in seen:
                    continue
                seen.add(path)
                result.append(path)

        return result

    def _walk(self, directory: Path) -> list[Path]:
        """Collect regular files below a directory, following links."""

        def on_error(error: OSError) -> None:
            raise FileScanError(directory, error)

        files = []
        visited: set[tuple[int, int]] = set()

        for root, dirnames, filenames in os.walk(
            directory, onerror=on_error, followlinks=True
        ):
            try:
                stat = os.stat(root)
            except OSError as e:
                raise FileScanError(directory, e) from e
            identity = (stat.st_dev, stat.st_ino)
            if identity in visited:
                logger.debug("Skipping directory loop at %s", root)
                dirnames[:] = []
                continue
            visited.add(identity)

            dirnames.sort()
            for name in sorted(filenames):
                path = Path(root) / name
                if path.is_file():
                    files.append(path)

        return files


class FileLocator:
    """Locate files for many entries at once."""

    def __init__(
        self,
        directories: list[Path],
        extensions: list[str] | None = None,
        finder: CitationKeyBasedFileFinder | None = None,
    ):
        """Initialize file locator.

        Args:
            directories: Directories to search
            extensions: Accepted extensions (default: pdf)
            finder: File finder to use (default: non-exact key matching)
        """
        self.directories = [Path(d) for d in directories]
        self.extensions = list(extensions) if extensions is not None else ["pdf"]
        self.finder = finder or CitationKeyBasedFileFinder()

    def locate(self, entry: Record | str) -> FileLinkResult:
        """Find the files of a single entry or citation key."""
        key = entry if isinstance(entry, str) else entry.key
        files = self.finder.find_associated_files(
            entry, self.directories, self.extensions
        )
        return FileLinkResult(
            entry_key=key, files=files, directories=list(self.directories)
        )

    def locate_for_entries(self, entries: list[Record]) -> list[FileLinkResult]:
        """Find files for each entry, in entry order.

        Raises:
            FileScanError: If an existing directory cannot be scanned
        """
        return [self.locate(entry) for entry in entries]
