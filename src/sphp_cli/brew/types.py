"""Value types reported by the package manager and service supervisor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sphp_cli.core.versions import RuntimeVersion, parse_version_token, version_from_formula


class ServiceState(str, Enum):
    STARTED = "started"
    STOPPED = "stopped"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "ServiceState":
        lowered = (value or "").strip().lower()
        if lowered == "started":
            return cls.STARTED
        if lowered in ("stopped", "none"):
            return cls.STOPPED
        return cls.OTHER


@dataclass(frozen=True)
class InstalledPackage:
    """An installed PHP formula and its full version string."""

    formula: str
    version: str

    @property
    def runtime_version(self) -> RuntimeVersion | None:
        return version_from_formula(self.formula) or parse_version_token(self.version)

    @property
    def is_pinned(self) -> bool:
        return "@" in self.formula


@dataclass(frozen=True)
class ServiceEntry:
    """A ``brew services`` row."""

    name: str
    state: ServiceState

    @property
    def is_running(self) -> bool:
        return self.state is ServiceState.STARTED


__all__ = ["InstalledPackage", "ServiceEntry", "ServiceState"]
