"""Runtime settings.

Values come from ``BUNDLE_AUTOUPDATE_*`` environment variables, falling back
to the Bundler defaults below.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BUNDLE_AUTOUPDATE_", extra="ignore")

    gemfile: str = "Gemfile"
    lockfile: str = "Gemfile.lock"
    update_command: str = "bundle update"
    install_command: str = "bundle install"
    version_source: Literal["gem", "rubygems"] = "gem"
    rubygems_url: str = "https://rubygems.org"
    http_timeout: float = 30.0
