"""Tests for shell command execution."""

import subprocess
from unittest.mock import patch

from autoupdate.commands import CommandRunner


class TestCommandRunner:
    """Test CommandRunner exit status and output handling."""

    def test_system_failure_returns_false(self, logger):
        """Should map a non-zero exit status to False and echo the command."""
        runner = CommandRunner(logger)

        with patch("autoupdate.commands.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess("bundle update", 1)

            assert runner.system("bundle update") is False

        mock_run.assert_called_once_with("bundle update", shell=True)
        assert logger.commands == ["bundle update"]

    def test_system_success_returns_true(self, logger):
        """Should map exit status 0 to True."""
        runner = CommandRunner(logger)

        with patch("autoupdate.commands.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess("bundle install", 0)

            assert runner.system("bundle install") is True

        assert logger.commands == ["bundle install"]

    def test_run_returns_stdout(self, logger):
        """Should return the captured standard output without echoing."""
        runner = CommandRunner(logger)

        with patch("autoupdate.commands.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(
                "gem list rails -r -a", 0, stdout="rails (7.0.4, 6.1.7)\n"
            )

            assert runner.run("gem list rails -r -a") == "rails (7.0.4, 6.1.7)\n"

        mock_run.assert_called_once_with(
            "gem list rails -r -a", shell=True, capture_output=True, text=True
        )
        assert logger.commands == []
