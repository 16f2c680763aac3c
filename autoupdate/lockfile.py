"""Gemfile.lock version extraction."""

import re
from pathlib import Path

from .errors import LockfileNotFoundError
from .models import LockfileEntry

# Top-level specs sit at exactly four spaces; their own dependencies are
# nested deeper and must not be picked up.
SPEC_LINE_PATTERN = re.compile(r"^ {4}(\S+)\s+\(([^)]*)\)")


def parse_lockfile(content: str) -> list[LockfileEntry]:
    """Extract resolved top-level specs from Gemfile.lock content.

    Args:
        content: The Gemfile.lock text

    Returns:
        Entries in file order, duplicates included
    """
    entries: list[LockfileEntry] = []
    for line in content.splitlines():
        match = SPEC_LINE_PATTERN.match(line)
        if match:
            entries.append(LockfileEntry(name=match.group(1), resolved_version=match.group(2)))
    return entries


class GemfileLock:
    """Resolved versions recorded in a project's Gemfile.lock."""

    def __init__(self, path: str | Path = "Gemfile.lock"):
        self.path = Path(path)
        self.version_map: dict[str, str] = {}
        self._entries: list[LockfileEntry] = []

    def load_versions(self) -> dict[str, str]:
        """Re-read the lock file and rebuild the name to version map.

        The previous map is replaced, never merged. When a gem appears more
        than once, the last occurrence wins.

        Returns:
            Mapping of gem name to resolved version string

        Raises:
            LockfileNotFoundError: If the lock file does not exist
        """
        try:
            content = self.path.read_text()
        except FileNotFoundError:
            raise LockfileNotFoundError(str(self.path))

        self._entries = parse_lockfile(content)
        self.version_map = {entry.name: entry.resolved_version for entry in self._entries}
        return self.version_map

    def entries(self) -> list[LockfileEntry]:
        """Entries parsed by the last ``load_versions()`` call."""
        return list(self._entries)
