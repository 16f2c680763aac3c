"""Exceptions raised by bundle-autoupdate."""


class AutoUpdateError(Exception):
    pass


class ManifestNotFoundError(AutoUpdateError, FileNotFoundError):
    def __init__(self, path: str):
        super().__init__(f"Gemfile not found: {path}")
        self.path = path


class LockfileNotFoundError(AutoUpdateError, FileNotFoundError):
    def __init__(self, path: str):
        super().__init__(f"Lock file not found: {path}")
        self.path = path


class ManifestWriteError(AutoUpdateError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path


class InvalidVersionError(AutoUpdateError, ValueError):
    def __init__(self, text: str | None):
        super().__init__(f"Invalid version: {text!r}")
        self.text = text


class InvalidScopeError(AutoUpdateError, ValueError):
    def __init__(self, scope: object):
        super().__init__(f"Invalid version_type: {scope}")
        self.scope = scope


class VersionSourceError(AutoUpdateError):
    pass
