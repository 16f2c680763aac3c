"""Pytest configuration and fixtures."""


import pytest


class RecordingLogger:
    """Logger that keeps messages in memory."""

    def __init__(self):
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.commands: list[str] = []

    def info(self, msg: str) -> None:
        self.infos.append(msg)

    def warn(self, msg: str) -> None:
        self.warnings.append(msg)

    def error(self, msg: str) -> None:
        self.errors.append(msg)

    def command(self, cmd: str) -> None:
        self.commands.append(cmd)


class StaticSource:
    """Version source returning a fixed list."""

    def __init__(self, versions: list[str]):
        self._versions = versions
        self.calls: list[str] = []

    def versions(self, name: str) -> list[str]:
        self.calls.append(name)
        return list(self._versions)


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def static_source():
    """Factory for version sources with a fixed listing."""
    return StaticSource


@pytest.fixture
def sample_gemfile():
    """Sample Gemfile content for testing."""
    return """source "https://rubygems.org"
git_source(:github) { |repo| "https://github.com/#{repo}.git" }

ruby "3.1.2"

# Core
gem "rails", "6.1.0"
gem 'pg', '~> 1.2', platforms: [:mri]
gem "puma"
gem "private-lib", github: "org/repo"

group :development, :test do
  gem "rspec-rails", "5.0.1", require: false # specs
end
"""


@pytest.fixture
def sample_lockfile():
    """Sample Gemfile.lock content for testing."""
    return """GIT
  remote: https://github.com/org/repo.git
  revision: 0123456789abcdef
  specs:
    private-lib (0.3.0)

GEM
  remote: https://rubygems.org/
  specs:
    pg (1.2.3)
    puma (5.6.4)
      nio4r (~> 2.0)
    rails (6.1.4)
      actionpack (= 6.1.4)
        rack (2.2.3)
    rspec-rails (5.1.2)

PLATFORMS
  ruby

DEPENDENCIES
  pg (~> 1.2)
  puma
  rails
  rspec-rails

BUNDLED WITH
   2.3.7
"""


@pytest.fixture
def project_dir(tmp_path, sample_gemfile, sample_lockfile):
    """Create a temporary project with a Gemfile and Gemfile.lock."""
    (tmp_path / "Gemfile").write_text(sample_gemfile)
    (tmp_path / "Gemfile.lock").write_text(sample_lockfile)
    return tmp_path
