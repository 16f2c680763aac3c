"""Gemfile parsing and rewriting.

A Gemfile is modelled as an ordered tuple of lines. ``gem`` declarations are
parsed into ``Declaration`` values; everything else is kept as ``Opaque`` text.
Every mutation maps over the tuple and re-joins it, so lines that are not
rewritten come back byte-for-byte.
"""

import re
from pathlib import Path

from .dependency import Dependency
from .errors import ManifestNotFoundError, ManifestWriteError
from .log import ConsoleLogger, Logger
from .models import VERSION_PATTERN, Declaration, ManifestLine, Opaque, VersionString, line_terminator
from .sources import VersionSource

MODIFIER_PATTERN = re.compile(r"\s+(?:if|unless)(?=[\s(]|\Z)")
PHYSICAL_LINE_PATTERN = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z")


class GemfileParser:
    """Line classifier for Gemfiles."""

    def __init__(self):
        # gem "name"[, "constraint"][, options]
        self.declaration_pattern = re.compile(
            r"""^\s*gem\s*['"](?P<name>[^'"]+)['"]\s*"""
            r"""(?:,\s*['"](?P<constraint>[^'"]+)['"])?\s*"""
            r"""(?:,\s*(?P<options>.*))?$"""
        )
        # Bundler's git-backed sources, in both hash styles
        self.source_control_pattern = re.compile(
            r",.*(?:\b(?:github|git|gist|bitbucket)\s*:(?!:)|:(?:github|git|gist|bitbucket)\s*=>)"
        )

    def parse_line(self, raw: str) -> ManifestLine:
        """Classify a single physical line (terminator included)."""
        code, _ = split_declaration(_strip_terminator(raw))
        match = self.declaration_pattern.match(code.rstrip())
        if not match:
            return Opaque(raw)

        options = match.group("options")
        return Declaration(
            raw=raw,
            name=match.group("name"),
            constraint=match.group("constraint"),
            options=(options.strip() or None) if options is not None else None,
            source_controlled=bool(self.source_control_pattern.search(code)),
        )

    def parse(self, content: str) -> tuple[ManifestLine, ...]:
        """Parse Gemfile content into lines."""
        return tuple(self.parse_line(raw) for raw in split_physical_lines(content))


def parse_gemfile(content: str) -> tuple[ManifestLine, ...]:
    """Parse Gemfile content into a tuple of Declaration/Opaque lines.

    Args:
        content: The Gemfile text

    Returns:
        One ManifestLine per physical line, in file order
    """
    parser = GemfileParser()
    return parser.parse(content)


def serialize(lines: tuple[ManifestLine, ...]) -> str:
    """Join lines back into Gemfile text."""
    return "".join(line.raw for line in lines)


def split_comment(body: str) -> tuple[str, str]:
    """Split a line body into code and a trailing ``#`` comment.

    A ``#`` inside a quoted string does not start a comment. Whitespace
    between the code and the comment stays with the comment.
    """
    quote = None
    for index, char in enumerate(body):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "#":
            code = body[:index].rstrip()
            return code, body[len(code):]
    code = body.rstrip()
    return code, body[len(code):]


def split_modifier(code: str) -> tuple[str, str]:
    """Split a trailing ``if``/``unless`` modifier off a statement.

    ``gem "x", "1.0" if ENV["CI"]`` becomes ``('gem "x", "1.0"', ' if ENV["CI"]')``.
    """
    quote = None
    for index, char in enumerate(code):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char.isspace() and MODIFIER_PATTERN.match(code, index):
            return code[:index], code[index:]
    return code, ""


def split_declaration(body: str) -> tuple[str, str]:
    """Split a line body into the gem call and everything after it.

    The trailer holds any ``if``/``unless`` modifier and trailing comment, so
    clauses can be inserted in front of it.
    """
    code, comment = split_comment(body)
    call, modifier = split_modifier(code)
    return call, modifier + comment


def split_physical_lines(content: str) -> list[str]:
    """Split text at ``\\n``, ``\\r\\n`` and ``\\r`` only, keeping terminators."""
    return PHYSICAL_LINE_PATTERN.findall(content)


def _strip_terminator(raw: str) -> str:
    return raw[: len(raw) - len(line_terminator(raw))]


def _rebuild(decl: Declaration, code: str, trailer: str) -> str:
    return code + trailer + decl.terminator


def strip_declaration(decl: Declaration) -> str:
    """Return the raw line with everything from the first comma removed.

    A declaration continued on the next line keeps its trailing comma so the
    continuation stays attached to it.
    """
    code, trailer = split_declaration(decl.body)
    if "," not in code:
        return decl.raw
    head = code[: code.index(",")]
    if code.endswith(","):
        head += ","
    return _rebuild(decl, head, trailer)


def pin_declaration(decl: Declaration, version: str) -> str:
    """Return the raw line with a ``"~> version"`` clause appended."""
    code, trailer = split_declaration(decl.body)
    clause = f', "~> {version}"'
    if code.endswith(","):
        return _rebuild(decl, code[:-1] + clause + ",", trailer)
    return _rebuild(decl, code + clause, trailer)


def replace_version(decl: Declaration, version: str) -> str:
    """Return the raw line with its first ``X.Y.Z`` token replaced."""
    return VERSION_PATTERN.sub(version, decl.raw, count=1)


class Gemfile:
    """Line-addressable model of a project's Gemfile."""

    def __init__(
        self,
        path: str | Path = "Gemfile",
        logger: Logger | None = None,
        parser: GemfileParser | None = None,
        source: VersionSource | None = None,
    ):
        self.path = Path(path)
        self.logger = logger or ConsoleLogger()
        self.parser = parser or GemfileParser()
        self.source = source
        self._lines: tuple[ManifestLine, ...] | None = None

    @classmethod
    def from_text(
        cls, content: str, path: str | Path = "Gemfile", logger: Logger | None = None
    ) -> "Gemfile":
        """Build a model from text without touching the filesystem."""
        gemfile = cls(path, logger=logger)
        gemfile._lines = gemfile.parser.parse(content)
        return gemfile

    @property
    def lines(self) -> tuple[ManifestLine, ...]:
        if self._lines is None:
            self._lines = self.parser.parse(self.read())
        return self._lines

    @property
    def content(self) -> str:
        """Gemfile text as currently held in memory."""
        return serialize(self.lines)

    def declarations(self) -> list[Declaration]:
        return [line for line in self.lines if isinstance(line, Declaration)]

    def dependencies(self) -> list[Dependency]:
        """List declared gems in file order.

        Returns:
            One Dependency per declaration line; empty if none are declared
        """
        return [
            Dependency(
                decl.name, decl.constraint, decl.options, source=self.source, logger=self.logger
            )
            for decl in self.declarations()
        ]

    def remove_all_versions(self) -> None:
        """Strip version constraints and options from every gem line, then write.

        Source-controlled declarations (github/git/gist/bitbucket) are kept
        intact. Options of other gems are dropped; the following
        ``bundle update`` regenerates the constraints.
        """

        def strip(line: ManifestLine) -> ManifestLine:
            if not isinstance(line, Declaration):
                return line
            if line.source_controlled:
                self.logger.warn(f"ignoring line: {line.raw}")
                return line
            stripped = strip_declaration(line)
            if stripped == line.raw:
                return line
            self.logger.info(f"removing version from line: {line.raw}")
            return self.parser.parse_line(stripped)

        self._replace(strip)
        self.write()

    def set_versions(self, version_map: dict[str, str]) -> None:
        """Append a ``"~> version"`` constraint to each gem found in version_map, then write.

        Args:
            version_map: Gem name to resolved version, as read from Gemfile.lock
        """

        def pin(line: ManifestLine) -> ManifestLine:
            if not isinstance(line, Declaration):
                return line
            self.logger.info(f"attempting to update on line: {line.raw}")
            version = version_map.get(line.name)
            if not version:
                self.logger.warn(f"gem {line.name} not found in Gemfile.lock")
                return line
            self.logger.info(f"updating {line.name} to {version}")
            return self.parser.parse_line(pin_declaration(line, version))

        self._replace(pin)
        self.write()

    def set_version(self, dependency: Dependency, new_version: str | VersionString) -> "Gemfile":
        """Replace the version number on the dependency's gem line.

        The change is kept in memory; call ``write()`` to persist it.

        Args:
            dependency: Gem whose declaration should change
            new_version: Version to put in place of the first ``X.Y.Z`` token

        Returns:
            This Gemfile
        """
        version = str(new_version)

        def update(line: ManifestLine) -> ManifestLine:
            if not isinstance(line, Declaration) or line.name != dependency.name:
                return line
            return self.parser.parse_line(replace_version(line, version))

        self._replace(update)
        return self

    def reload(self) -> None:
        """Discard in-memory changes and re-read the Gemfile."""
        self._lines = self.parser.parse(self.read())

    def read(self) -> str:
        try:
            with self.path.open(newline="") as f:
                return f.read()
        except FileNotFoundError:
            raise ManifestNotFoundError(str(self.path))

    def write(self) -> None:
        """Write the in-memory content back to the Gemfile."""
        try:
            # newline="" keeps \r\n terminators as parsed
            with self.path.open("w", newline="") as f:
                f.write(self.content)
        except OSError as e:
            raise ManifestWriteError(str(self.path), str(e))

    def _replace(self, transform) -> None:
        self._lines = tuple(transform(line) for line in self.lines)
