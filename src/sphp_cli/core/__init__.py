"""Core utilities: naming constants, versions, paths, configuration and errors."""

from .constants import FAMILY_PATTERN, PHP_FORMULA, SHELL_RC_CANDIDATES
from .exceptions import (
    AbortedByUser,
    BrewCommandError,
    ConfigError,
    InvalidVersionFormat,
    LinkFailure,
    PackageManagerMissing,
    SwitcherError,
    VerificationFailure,
    VersionNotInstalled,
)
from .versions import RuntimeVersion, parse_version_token, validate_version

__all__ = [
    "AbortedByUser",
    "BrewCommandError",
    "ConfigError",
    "FAMILY_PATTERN",
    "InvalidVersionFormat",
    "LinkFailure",
    "PHP_FORMULA",
    "PackageManagerMissing",
    "RuntimeVersion",
    "SHELL_RC_CANDIDATES",
    "SwitcherError",
    "VerificationFailure",
    "VersionNotInstalled",
    "parse_version_token",
    "validate_version",
]
