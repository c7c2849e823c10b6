"""Package manager interface used by discovery and the switch procedure.

Production code talks to Homebrew through ``Homebrew``; tests substitute an
in-memory implementation.
"""

from __future__ import annotations

from typing import Protocol

from .types import ServiceEntry


class PackageManager(Protocol):
    """Command-line contract of the package manager and its service supervisor."""

    def is_available(self) -> bool:
        """Return True when the package manager executable is on PATH."""
        ...

    def bootstrap(self) -> None:
        """Run the package manager's own installer."""
        ...

    def list_formulas(self) -> list[str]:
        """Names of all installed formulas."""
        ...

    def installed_versions(self, formula: str) -> list[str]:
        """Installed version strings for ``formula``, newest first."""
        ...

    def install_formula(self, formula: str) -> None:
        ...

    def link_formula(self, formula: str) -> None:
        """Force-link ``formula``, overwriting conflicting files."""
        ...

    def unlink_formula(self, formula: str) -> None:
        ...

    def list_services(self) -> list[ServiceEntry]:
        ...

    def control_service(self, action: str, name: str) -> None:
        """Run ``start``, ``stop`` or ``restart`` for service ``name``."""
        ...


__all__ = ["PackageManager"]
