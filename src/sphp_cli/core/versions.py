"""PHP version parsing and formula naming."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .constants import PHP_FORMULA, VERSION_PATTERN
from .exceptions import InvalidVersionFormat

_VERSION_TOKEN = re.compile(r"(\d+)\.(\d+)(?:\.\d+)?")


@dataclass(frozen=True, order=True)
class RuntimeVersion:
    """A ``MAJOR.MINOR`` PHP version such as ``8.1``."""

    major: int
    minor: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    @property
    def formula(self) -> str:
        """Pinned Homebrew formula name for this version."""
        return f"{PHP_FORMULA}@{self}"

    def matches(self, full_version: str) -> bool:
        """Return True when ``full_version`` (e.g. ``8.1.27``) belongs to this version."""
        parsed = parse_version_token(full_version)
        return parsed == self


def validate_version(value: str) -> RuntimeVersion:
    """Parse user input into a RuntimeVersion.

    Raises:
        InvalidVersionFormat: unless ``value`` matches ``^\\d+\\.\\d+$``.
    """
    text = (value or "").strip()
    if not VERSION_PATTERN.match(text):
        raise InvalidVersionFormat(value)
    major, minor = text.split(".")
    return RuntimeVersion(int(major), int(minor))


def is_version_string(value: str) -> bool:
    return bool(VERSION_PATTERN.match(value or ""))


def parse_version_token(text: str | None) -> RuntimeVersion | None:
    """Return the first ``X.Y[.Z]`` token in ``text`` as a RuntimeVersion, or None."""
    if not text:
        return None
    match = _VERSION_TOKEN.search(text)
    if not match:
        return None
    return RuntimeVersion(int(match.group(1)), int(match.group(2)))


def version_from_formula(formula: str) -> RuntimeVersion | None:
    """``php@8.1`` -> 8.1; bare ``php`` carries no version in its name."""
    _, sep, suffix = formula.partition("@")
    if not sep:
        return None
    return parse_version_token(suffix)


__all__ = [
    "RuntimeVersion",
    "is_version_string",
    "parse_version_token",
    "validate_version",
    "version_from_formula",
]
