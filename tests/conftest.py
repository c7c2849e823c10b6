from __future__ import annotations

import os
from pathlib import Path

import pytest

from sphp_cli.brew import ServiceEntry, ServiceState
from sphp_cli.core.exceptions import BrewCommandError
from sphp_cli.core.paths import BrewPaths
from sphp_cli.switcher.host import Host


def version_banner(version: str) -> str:
    return f"PHP {version} (cli) (built: Jan  1 2024 00:00:00) (NTS)\nCopyright (c) The PHP Group\n"


def fake_probe(binary: Path) -> str | None:
    """Read the fake binary's first line instead of executing it."""
    if not binary.exists():
        return None
    lines = binary.read_text(encoding="utf-8").splitlines()
    return lines[0] if lines else None


class FakeBrew:
    """In-memory Homebrew that lays out kegs under a temporary prefix."""

    def __init__(self, paths: BrewPaths):
        self.paths = paths
        self.available = True
        self.formulas: dict[str, list[str]] = {}
        self.services: dict[str, ServiceState] = {}
        self.installable: dict[str, str] = {}
        self.failing_services: set[str] = set()
        self.services_error: str | None = None
        self.calls: list[tuple[str, ...]] = []

    def add_formula(self, formula: str, version: str, *, fpm: bool = True) -> Path:
        keg = self.paths.opt_dir / formula
        (keg / "bin").mkdir(parents=True, exist_ok=True)
        binary = keg / "bin" / "php"
        binary.write_text(version_banner(version), encoding="utf-8")
        if fpm:
            (keg / "sbin").mkdir(parents=True, exist_ok=True)
            (keg / "sbin" / "php-fpm").write_text(version_banner(version), encoding="utf-8")
        self.formulas[formula] = [version]
        self.services.setdefault(formula, ServiceState.STOPPED)
        return binary

    def activate(self, formula: str) -> None:
        """Point bin/php at ``formula`` the way a previous switch would have."""
        active = self.paths.active_binary
        active.parent.mkdir(parents=True, exist_ok=True)
        if active.is_symlink() or active.exists():
            active.unlink()
        os.symlink(self.paths.opt_dir / formula / "bin" / "php", active)

    def is_available(self) -> bool:
        self.calls.append(("which",))
        return self.available

    def bootstrap(self) -> None:
        self.calls.append(("bootstrap",))
        self.available = True

    def list_formulas(self) -> list[str]:
        self.calls.append(("list",))
        return sorted([*self.formulas, "git", "openssl@3", "phpunit"])

    def installed_versions(self, formula: str) -> list[str]:
        self.calls.append(("versions", formula))
        return list(self.formulas.get(formula, []))

    def install_formula(self, formula: str) -> None:
        self.calls.append(("install", formula))
        if formula not in self.installable:
            raise BrewCommandError(["install", formula], 1, f"Error: No available formula with the name \"{formula}\".")
        self.add_formula(formula, self.installable[formula])

    def link_formula(self, formula: str) -> None:
        self.calls.append(("link", formula))
        self.activate(formula)

    def unlink_formula(self, formula: str) -> None:
        self.calls.append(("unlink", formula))
        active = self.paths.active_binary
        if active.is_symlink() and f"/opt/{formula}/" in os.readlink(active):
            active.unlink()

    def list_services(self) -> list[ServiceEntry]:
        self.calls.append(("services", "list"))
        if self.services_error:
            raise BrewCommandError(["services", "list"], 1, self.services_error)
        return [ServiceEntry(name, state) for name, state in sorted(self.services.items())]

    def control_service(self, action: str, name: str) -> None:
        self.calls.append(("services", action, name))
        if name in self.failing_services:
            raise BrewCommandError(["services", action, name], 1, f"Error: Failed to {action} {name}")
        self.services[name] = ServiceState.STOPPED if action == "stop" else ServiceState.STARTED

    def mutating_calls(self) -> list[tuple[str, ...]]:
        readonly = {"which", "list", "versions"}
        return [call for call in self.calls if call[0] not in readonly and call[:2] != ("services", "list")]


class RecordingReporter:
    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.records.append(("info", message))

    def success(self, message: str) -> None:
        self.records.append(("success", message))

    def warning(self, message: str) -> None:
        self.records.append(("warning", message))

    def error(self, message: str) -> None:
        self.records.append(("error", message))

    def messages(self, level: str) -> list[str]:
        return [message for lvl, message in self.records if lvl == level]


@pytest.fixture()
def brew_paths(tmp_path: Path) -> BrewPaths:
    prefix = tmp_path / "homebrew"
    (prefix / "bin").mkdir(parents=True)
    (prefix / "sbin").mkdir(parents=True)
    return BrewPaths(prefix)


@pytest.fixture()
def fake_brew(brew_paths: BrewPaths) -> FakeBrew:
    return FakeBrew(brew_paths)


@pytest.fixture()
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture()
def host(fake_brew: FakeBrew, brew_paths: BrewPaths, home_dir: Path) -> Host:
    return Host(brew=fake_brew, paths=brew_paths, home=home_dir, probe=fake_probe)


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    config_home = tmp_path / "sphp-home"
    monkeypatch.setenv("SPHP_HOME", str(config_home))
    monkeypatch.delenv("BREW_PREFIX", raising=False)
    return config_home
