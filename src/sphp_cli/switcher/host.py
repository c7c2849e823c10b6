"""Explicit handle on the external system the switcher mutates."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Protocol

from sphp_cli.brew import Homebrew, PackageManager
from sphp_cli.core.config import SwitcherConfig
from sphp_cli.core.paths import BrewPaths, resolve_prefix

logger = logging.getLogger(__name__)

VersionProbe = Callable[[Path], "str | None"]


class Reporter(Protocol):
    """Severity-tagged user output."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


def probe_binary_version(binary: Path) -> str | None:
    """Return the first line of ``<binary> --version``, or None."""
    if not binary.exists():
        return None
    try:
        completed = subprocess.run(
            [str(binary), "--version"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("Cannot execute %s: %s", binary, exc)
        return None
    if completed.returncode != 0:
        return None
    for line in (completed.stdout or "").splitlines():
        if line.strip():
            return line.strip()
    return None


@dataclass
class Host:
    """Package manager, managed paths and home directory for one invocation."""

    brew: PackageManager
    paths: BrewPaths
    home: Path = field(default_factory=Path.home)
    probe: VersionProbe = probe_binary_version


def build_host(config: SwitcherConfig) -> Host:
    """Create the production host from the effective configuration."""
    prefix, origin = resolve_prefix(config.brew_prefix)
    logger.debug("Using Homebrew prefix %s (from %s)", prefix, origin)
    return Host(brew=Homebrew(), paths=BrewPaths(prefix))


__all__ = ["Host", "Reporter", "VersionProbe", "build_host", "probe_binary_version"]
