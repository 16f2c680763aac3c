"""Listing the published versions of a gem."""

import re
import shlex
from typing import Protocol

import httpx

from .commands import CommandRunner
from .errors import VersionSourceError
from .models import VERSION_PATTERN


class VersionSource(Protocol):
    """Anything that can list a gem's versions, newest first."""

    def versions(self, name: str) -> list[str]: ...


class GemListSource:
    """Version listing from ``gem list NAME -r -a``.

    RubyGems prints one line per matching gem, e.g.
    ``rails (7.1.0, 7.0.8, 6.1.7)``, with versions newest first.
    """

    def __init__(self, runner: CommandRunner | None = None):
        self.runner = runner or CommandRunner()

    def versions(self, name: str) -> list[str]:
        output = self.runner.run(f"gem list {shlex.quote(name)} -r -a")
        # other gems sharing the prefix are listed too
        line_pattern = re.compile(rf"^{re.escape(name)}\s.*$", re.MULTILINE)
        match = line_pattern.search(output)
        if not match:
            return []
        return VERSION_PATTERN.findall(match.group(0))


class RubyGemsSource:
    """Version listing from the rubygems.org JSON API."""

    def __init__(
        self,
        base_url: str = "https://rubygems.org",
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ):
        """Initialize RubyGems source.

        Args:
            base_url: Registry root URL
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client
        self._cache: dict[str, list[str]] = {}

    def versions(self, name: str) -> list[str]:
        """Get all versions of a gem in the order the registry lists them.

        Args:
            name: Name of the gem

        Returns:
            ``X.Y.Z`` version strings, newest first; empty if the gem is unknown
        """
        if name in self._cache:
            return self._cache[name]

        releases = self._fetch_versions(name)
        versions = []
        for release in releases:
            # final X.Y.Z releases only; platform builds repeat the same number
            if release.get("prerelease"):
                continue
            number = str(release.get("number", ""))
            if VERSION_PATTERN.fullmatch(number) and number not in versions:
                versions.append(number)

        self._cache[name] = versions
        return versions

    def _fetch_versions(self, name: str) -> list[dict]:
        """Fetch the version list document for a gem.

        Args:
            name: Name of the gem

        Returns:
            List of release dicts, or an empty list if the gem does not exist
        """
        url = f"{self.base_url}/api/v1/versions/{name}.json"

        try:
            if self.client is not None:
                response = self.client.get(url, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
            if response.status_code == 404:
                return []
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException:
            raise VersionSourceError(f"Timeout fetching versions for {name}")
        except httpx.HTTPStatusError as e:
            raise VersionSourceError(f"HTTP error fetching {name}: {e}")
        except httpx.HTTPError as e:
            raise VersionSourceError(f"Network error fetching {name}: {e}")
        except ValueError as e:
            raise VersionSourceError(f"Invalid response for {name}: {e}")
