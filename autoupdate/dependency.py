"""Declared gems and scoped latest-version lookup."""

import re
from dataclasses import dataclass, field
from enum import Enum

from .commands import CommandRunner
from .errors import InvalidScopeError
from .log import ConsoleLogger, Logger
from .models import VersionString
from .sources import GemListSource, VersionSource

_COMPONENTS = re.compile(r"(\d+)(?:\.(\d+))?(?:\.(\d+))?")


class Scope(str, Enum):
    """How far an upgrade may move from the current version."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


@dataclass
class Dependency:
    """A gem declared in the Gemfile."""

    name: str
    version: str | None = None  # declared constraint text, e.g. "~> 6.1.0"
    options: str | None = None
    source: VersionSource | None = field(default=None, repr=False, compare=False)
    logger: Logger | None = field(default=None, repr=False, compare=False)
    major: int | None = field(default=None, init=False)
    minor: int | None = field(default=None, init=False)
    patch: int | None = field(default=None, init=False)

    def __post_init__(self):
        if self.logger is None:
            self.logger = ConsoleLogger()
        if self.source is None:
            self.source = GemListSource(CommandRunner(self.logger))
        match = _COMPONENTS.search(self.version) if self.version else None
        if match:
            self.major, self.minor, self.patch = (
                int(part) if part is not None else None for part in match.groups()
            )

    def available_versions(self) -> list[str]:
        """Return every published version, newest first.

        The order is whatever the version source reports; RubyGems lists
        newest first and this method does not re-sort.
        """
        self.logger.info(f"Fetching available versions of {self.name}")
        return self.source.versions(self.name)

    def last_version(self, version_type: Scope | str) -> str | None:
        """Return the newest version within the given scope.

        Example: ``last_version("patch")`` returns the newest patch release
        for the current major/minor version.

        Args:
            version_type: ``"patch"``, ``"minor"`` or ``"major"``

        Returns:
            Version string such as ``"1.2.3"``, or None if nothing in scope is
            published (i.e. the gem is already at its latest)

        Raises:
            InvalidScopeError: If version_type is not a known scope
        """
        scope = _coerce_scope(version_type)
        versions = self.available_versions()

        if scope is Scope.MAJOR:
            return versions[0] if versions else None
        if scope is Scope.MINOR:
            return self._first_matching(versions, lambda v: v.major == self.major)
        return self._first_matching(
            versions, lambda v: (v.major, v.minor) == (self.major, self.minor)
        )

    def _first_matching(self, versions: list[str], predicate) -> str | None:
        if self.major is None:
            return None
        for version in versions:
            if predicate(VersionString.parse(version)):
                return version
        return None


def _coerce_scope(value: Scope | str) -> Scope:
    try:
        return Scope(value)
    except ValueError:
        raise InvalidScopeError(value)
