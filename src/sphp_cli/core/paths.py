"""Homebrew prefix resolution and the paths derived from it.

Resolution order for the prefix:
1. BREW_PREFIX environment variable
2. ``brew_prefix`` in the user config file
3. ``brew --prefix``
4. Platform default (/opt/homebrew on Apple Silicon, Linuxbrew on Linux, /usr/local)
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from .constants import FPM_BINARY, PHP_FORMULA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrewPaths:
    """Filesystem locations managed by the switcher under one prefix."""

    prefix: Path

    @property
    def bin_dir(self) -> Path:
        return self.prefix / "bin"

    @property
    def sbin_dir(self) -> Path:
        return self.prefix / "sbin"

    @property
    def opt_dir(self) -> Path:
        return self.prefix / "opt"

    @property
    def etc_dir(self) -> Path:
        return self.prefix / "etc" / "php"

    @property
    def active_binary(self) -> Path:
        return self.bin_dir / PHP_FORMULA

    @property
    def active_fpm(self) -> Path:
        return self.sbin_dir / FPM_BINARY

    def binary_candidates(self, formula: str, version: str) -> list[Path]:
        """Where a version's ``php`` binary may live, in lookup order."""
        return [
            self.bin_dir / f"{PHP_FORMULA}@{version}",
            self.opt_dir / formula / "bin" / PHP_FORMULA,
        ]

    def fpm_candidates(self, formula: str, version: str) -> list[Path]:
        return [
            self.sbin_dir / f"{FPM_BINARY}@{version}",
            self.opt_dir / formula / "sbin" / FPM_BINARY,
        ]


def default_prefix() -> Path:
    """Return Homebrew's platform default install prefix."""
    if sys.platform == "darwin":
        if platform.machine() == "arm64":
            return Path("/opt/homebrew")
        return Path("/usr/local")
    if sys.platform.startswith("linux"):
        return Path("/home/linuxbrew/.linuxbrew")
    return Path("/usr/local")


def _query_brew_prefix() -> Path | None:
    if shutil.which("brew") is None:
        return None
    try:
        completed = subprocess.run(
            ["brew", "--prefix"],
            capture_output=True,
            text=True,
            check=False,
            timeout=15,
        )
    except (subprocess.TimeoutExpired, OSError) as exc:
        logger.debug("brew --prefix failed: %s", exc)
        return None
    output = (completed.stdout or "").strip()
    if completed.returncode != 0 or not output:
        return None
    return Path(output)


def resolve_prefix(configured: str | None = None) -> tuple[Path, str]:
    """Return the Homebrew prefix and a label naming where it came from."""
    if env_prefix := os.environ.get("BREW_PREFIX"):
        return Path(env_prefix), "env"
    if configured:
        return Path(configured).expanduser(), "config"
    if queried := _query_brew_prefix():
        return queried, "brew"
    return default_prefix(), "default"


__all__ = ["BrewPaths", "default_prefix", "resolve_prefix"]
