"""Read-only queries: installed versions, active version and service state."""

from __future__ import annotations

import logging
from typing import Iterator

from sphp_cli.brew import InstalledPackage, ServiceEntry
from sphp_cli.core.constants import FAMILY_PATTERN
from sphp_cli.core.versions import RuntimeVersion, parse_version_token

from .host import Host

logger = logging.getLogger(__name__)


def is_family_formula(name: str) -> bool:
    return bool(FAMILY_PATTERN.match(name))


def list_installed(host: Host) -> Iterator[InstalledPackage]:
    """Yield every installed PHP formula with its installed version.

    Each call re-queries the package manager.
    """
    for formula in host.brew.list_formulas():
        if not is_family_formula(formula):
            continue
        versions = host.brew.installed_versions(formula)
        if not versions:
            logger.debug("No installed versions reported for %s", formula)
            continue
        yield InstalledPackage(formula=formula, version=versions[0])


def formula_for_version(host: Host, version: RuntimeVersion) -> str | None:
    """Return the installed formula providing ``version``, preferring the pinned keg."""
    bare_match: str | None = None
    for package in list_installed(host):
        if package.formula == version.formula:
            return package.formula
        if not package.is_pinned and version.matches(package.version):
            bare_match = package.formula
    return bare_match


def current_active_version_string(host: Host) -> str | None:
    """First line of the active binary's ``--version`` output."""
    return host.probe(host.paths.active_binary)


def current_active_version(host: Host) -> RuntimeVersion | None:
    """Active PHP version, or None when there is no usable active binary."""
    return parse_version_token(current_active_version_string(host))


def is_version_active(host: Host, version: RuntimeVersion) -> bool:
    return current_active_version(host) == version


def family_services(host: Host) -> list[ServiceEntry]:
    return [entry for entry in host.brew.list_services() if is_family_formula(entry.name)]


def running_family_services(host: Host) -> list[ServiceEntry]:
    return [entry for entry in family_services(host) if entry.is_running]


def is_service_running(host: Host, version: RuntimeVersion) -> bool:
    formula = formula_for_version(host, version) or version.formula
    return any(entry.name == formula for entry in running_family_services(host))


__all__ = [
    "current_active_version",
    "current_active_version_string",
    "family_services",
    "formula_for_version",
    "is_family_formula",
    "is_service_running",
    "is_version_active",
    "list_installed",
    "running_family_services",
]
