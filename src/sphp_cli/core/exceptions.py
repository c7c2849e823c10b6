"""Exception hierarchy for the PHP switcher.

Every error the CLI turns into exit code 1 derives from ``SwitcherError``.
"""

from __future__ import annotations


class SwitcherError(Exception):
    """Base exception for switcher errors."""
    pass


class InvalidVersionFormat(SwitcherError):
    """The requested version is not of the ``MAJOR.MINOR`` shape."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid PHP version format: {value!r}. Expected format: X.Y (e.g., 7.4, 8.0, 8.1)"
        )


class PackageManagerMissing(SwitcherError):
    """Homebrew is not on the search path."""

    def __init__(self, message: str | None = None):
        super().__init__(message or "Homebrew not found. Please install Homebrew first.")


class VersionNotInstalled(SwitcherError):
    """No installed formula provides the requested version."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"PHP {version} is not installed (brew install php@{version})")


class AbortedByUser(SwitcherError):
    """The user declined an interactive prompt."""
    pass


class LinkFailure(SwitcherError):
    """Creating or removing a managed symlink failed."""
    pass


class VerificationFailure(SwitcherError):
    """The active version after a switch does not match the request."""

    def __init__(self, expected: str, actual: str | None):
        self.expected = expected
        self.actual = actual
        found = actual or "no PHP binary"
        super().__init__(
            f"Verification failed. Current PHP version does not match expected version {expected} (found: {found})"
        )


class BrewCommandError(SwitcherError):
    """A Homebrew command exited non-zero."""

    def __init__(self, args: list[str], returncode: int, stderr: str = ""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip().splitlines()[0] if stderr.strip() else f"exit code {returncode}"
        super().__init__(f"brew {' '.join(args)} failed: {detail}")


class ConfigError(SwitcherError):
    """The user configuration file is invalid."""
    pass


__all__ = [
    "AbortedByUser",
    "BrewCommandError",
    "ConfigError",
    "InvalidVersionFormat",
    "LinkFailure",
    "PackageManagerMissing",
    "SwitcherError",
    "VerificationFailure",
    "VersionNotInstalled",
]
