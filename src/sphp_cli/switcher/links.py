"""Symlink management for the active ``php`` and ``php-fpm`` binaries."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sphp_cli.core.exceptions import LinkFailure
from sphp_cli.core.versions import RuntimeVersion

from .discovery import is_family_formula
from .host import Host, Reporter

logger = logging.getLogger(__name__)


def _first_existing(candidates: list[Path]) -> Path | None:
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def resolve_target_binary(host: Host, formula: str, version: RuntimeVersion) -> Path | None:
    return _first_existing(host.paths.binary_candidates(formula, str(version)))


def resolve_fpm_binary(host: Host, formula: str, version: RuntimeVersion) -> Path | None:
    return _first_existing(host.paths.fpm_candidates(formula, str(version)))


def _force_symlink(target: Path, link: Path) -> None:
    """Equivalent of ``ln -sf target link``."""
    link.parent.mkdir(parents=True, exist_ok=True)
    if link.is_symlink() or link.exists():
        link.unlink()
    os.symlink(target, link)


def unlink_active(host: Host, reporter: Reporter) -> bool:
    """Remove the active ``php`` symlink.

    A regular file at the active path is never removed.

    Returns:
        True when a symlink was removed.
    """
    active = host.paths.active_binary
    if active.is_symlink():
        reporter.info("Unlinking current PHP version...")
        try:
            active.unlink()
        except OSError as exc:
            raise LinkFailure(f"Failed to unlink current PHP at {active}: {exc}") from exc
        return True
    if active.exists():
        logger.warning("%s is not a symlink; leaving it in place", active)
        reporter.warning("PHP binary exists but is not a symlink. Skipping unlink.")
    return False


def link_active(host: Host, formula: str, version: RuntimeVersion, reporter: Reporter) -> Path:
    """Point the active ``php`` path at ``version``'s binary."""
    target = resolve_target_binary(host, formula, version)
    if target is None:
        expected = ", ".join(str(p) for p in host.paths.binary_candidates(formula, str(version)))
        raise LinkFailure(f"PHP {version} binary not found (looked in {expected})")

    reporter.info(f"Linking PHP {version}...")
    active = host.paths.active_binary
    if active.exists() and not active.is_symlink():
        raise LinkFailure(f"Refusing to replace non-symlink file at {active}")
    try:
        _force_symlink(target, active)
    except OSError as exc:
        raise LinkFailure(f"Failed to create symlink for PHP {version}: {exc}") from exc
    logger.debug("Linked %s -> %s", active, target)
    return target


def brew_relink(host: Host, formula: str, version: RuntimeVersion, reporter: Reporter) -> Path:
    """Link ``formula`` through the package manager instead of a direct symlink."""
    active = host.paths.active_binary
    if active.exists() and not active.is_symlink():
        raise LinkFailure(f"Refusing to let brew overwrite non-symlink file at {active}")
    for other in host.brew.list_formulas():
        if is_family_formula(other):
            host.brew.unlink_formula(other)
    reporter.info(f"Linking PHP {version} with Homebrew...")
    host.brew.link_formula(formula)
    if not active.exists():
        raise LinkFailure(f"brew link {formula} did not create {active}")
    return active


def link_companion(host: Host, formula: str, version: RuntimeVersion, reporter: Reporter) -> Path | None:
    """Relink ``php-fpm``; a missing binary or OS error only warns."""
    target = resolve_fpm_binary(host, formula, version)
    if target is None:
        reporter.warning(f"PHP-FPM {version} not found, skipping PHP-FPM update")
        return None

    reporter.info("Updating PHP-FPM symlink...")
    link = host.paths.active_fpm
    if link.exists() and not link.is_symlink():
        reporter.warning(f"{link} is not a symlink. Skipping PHP-FPM update.")
        return None
    try:
        _force_symlink(target, link)
    except OSError as exc:
        logger.warning("PHP-FPM relink failed: %s", exc)
        reporter.warning(f"Failed to create PHP-FPM symlink: {exc}")
        return None
    return target


__all__ = [
    "brew_relink",
    "link_active",
    "link_companion",
    "resolve_fpm_binary",
    "resolve_target_binary",
    "unlink_active",
]
