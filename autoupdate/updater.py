"""Update workflow: relax, resolve, re-pin, install."""

import shlex

from .commands import CommandRunner
from .config import Settings
from .dependency import Dependency, Scope
from .gemfile import Gemfile
from .lockfile import GemfileLock
from .log import ConsoleLogger, Logger
from .models import VersionString
from .sources import GemListSource, RubyGemsSource, VersionSource


def build_source(settings: Settings, runner: CommandRunner) -> VersionSource:
    """Pick the version listing configured in settings."""
    if settings.version_source == "rubygems":
        return RubyGemsSource(base_url=settings.rubygems_url, timeout=settings.http_timeout)
    return GemListSource(runner)


class AutoUpdater:
    """Drives Bundler to upgrade and re-pin every gem in the Gemfile."""

    def __init__(
        self,
        settings: Settings | None = None,
        logger: Logger | None = None,
        runner: CommandRunner | None = None,
        gemfile: Gemfile | None = None,
        gemfile_lock: GemfileLock | None = None,
    ):
        self.settings = settings or Settings()
        self.logger = logger or ConsoleLogger()
        self.runner = runner or CommandRunner(self.logger)
        self.gemfile = gemfile or Gemfile(
            self.settings.gemfile,
            logger=self.logger,
            source=build_source(self.settings, self.runner),
        )
        self.gemfile_lock = gemfile_lock or GemfileLock(self.settings.lockfile)

    def run(self, update: bool = True) -> bool:
        """Run the update workflow.

        With ``update`` set, constraints are stripped and the update command
        runs first; if it fails the workflow stops there. Either way the
        Gemfile is then pinned to the lock file and the install command runs.

        Args:
            update: False to skip straight to pinning from the current lock file

        Returns:
            True if every command succeeded
        """
        if update:
            self.gemfile.remove_all_versions()
            if not self.runner.system(self.settings.update_command):
                self.logger.error("Aborting due to error")
                return False

        self.gemfile.set_versions(self.gemfile_lock.load_versions())
        return self.runner.system(self.settings.install_command)

    def update_dependency(self, dependency: Dependency, scope: Scope | str = Scope.PATCH) -> bool:
        """Move a single gem to its newest version within scope.

        Args:
            dependency: Gem to upgrade, as listed by the Gemfile
            scope: ``"patch"``, ``"minor"`` or ``"major"``

        Returns:
            True if the Gemfile changed and the update command succeeded
        """
        current = VersionString.search(dependency.version or "")
        if current is None:
            self.logger.warn(f"gem {dependency.name} has no pinned version to update")
            return False

        new_version = dependency.last_version(scope)
        if new_version is None or new_version == str(current):
            self.logger.info(f"{dependency.name} is already at its latest {Scope(scope).value} version")
            return False

        self.logger.info(f"updating {dependency.name} from {dependency.version} to {new_version}")
        self.gemfile.set_version(dependency, new_version).write()
        return self.runner.system(f"{self.settings.update_command} {shlex.quote(dependency.name)}")
