"""Core data models for bundle-autoupdate."""

import re
from dataclasses import dataclass

from .errors import InvalidVersionError

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+")
_STRICT_VERSION = re.compile(r"(\d+)\.(\d+)\.(\d+)")


@dataclass(frozen=True, order=True)
class VersionString:
    """A strict three-part ``major.minor.patch`` version.

    Ordering compares the numeric triple, so ``1.10.0 > 1.9.9``.
    """

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "VersionString":
        """Parse an exact ``X.Y.Z`` string.

        Args:
            text: Version text such as ``"6.1.4"``

        Returns:
            Parsed VersionString

        Raises:
            InvalidVersionError: If the text is not exactly three dot-separated integers
        """
        match = _STRICT_VERSION.fullmatch(text) if isinstance(text, str) else None
        if not match:
            raise InvalidVersionError(text)
        return cls(*(int(part) for part in match.groups()))

    @classmethod
    def search(cls, text: str) -> "VersionString | None":
        """Return the first ``X.Y.Z`` token embedded in text, if any."""
        match = VERSION_PATTERN.search(text or "")
        if not match:
            return None
        return cls.parse(match.group(0))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class Declaration:
    """A ``gem`` declaration line in a Gemfile."""

    raw: str
    name: str
    constraint: str | None = None
    options: str | None = None
    source_controlled: bool = False

    @property
    def body(self) -> str:
        """Line text without its terminator."""
        return self.raw[: len(self.raw) - len(self.terminator)]

    @property
    def terminator(self) -> str:
        return line_terminator(self.raw)


@dataclass(frozen=True)
class Opaque:
    """Any Gemfile line that is not a gem declaration."""

    raw: str


ManifestLine = Declaration | Opaque


@dataclass(frozen=True)
class LockfileEntry:
    """A top-level resolved spec from Gemfile.lock."""

    name: str
    resolved_version: str


def line_terminator(raw: str) -> str:
    """Return the trailing newline sequence of a physical line ('' for the last line)."""
    if raw.endswith("\r\n"):
        return "\r\n"
    if raw.endswith(("\n", "\r")):
        return raw[-1]
    return ""
