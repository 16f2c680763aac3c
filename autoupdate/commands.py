"""Shell command execution."""

import subprocess

from .log import ConsoleLogger, Logger


class CommandRunner:
    """Runs external commands through the shell.

    Calls block until the command exits; there is no timeout.
    """

    def __init__(self, logger: Logger | None = None):
        self.logger = logger or ConsoleLogger()

    def system(self, cmd: str) -> bool:
        """Echo the command, then run it with inherited stdio.

        Args:
            cmd: Shell command line, e.g. ``"bundle update"``

        Returns:
            True if the command exited with status 0, False otherwise
        """
        self.logger.command(cmd)
        completed = subprocess.run(cmd, shell=True)
        return completed.returncode == 0

    def run(self, cmd: str) -> str:
        """Run a command and return its standard output."""
        completed = subprocess.run(cmd, shell=True, capture_output=True, text=True)
        return completed.stdout
