"""Tests for the Homebrew adapter (subprocess patched)."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from sphp_cli.brew import Homebrew, ServiceEntry, ServiceState, parse_services_list
from sphp_cli.brew.types import InstalledPackage
from sphp_cli.core.exceptions import BrewCommandError
from sphp_cli.core.versions import RuntimeVersion

SERVICES_OUTPUT = """\
Name    Status  User File
dnsmasq none
php     stopped
php@8.1 started root ~/Library/LaunchAgents/homebrew.mxcl.php@8.1.plist
php@7.4 error  256 root ~/Library/LaunchAgents/homebrew.mxcl.php@7.4.plist
"""


def _completed(args: list[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)


def test_parse_services_list() -> None:
    entries = parse_services_list(SERVICES_OUTPUT)
    assert entries == [
        ServiceEntry("dnsmasq", ServiceState.STOPPED),
        ServiceEntry("php", ServiceState.STOPPED),
        ServiceEntry("php@8.1", ServiceState.STARTED),
        ServiceEntry("php@7.4", ServiceState.OTHER),
    ]
    assert [entry.name for entry in entries if entry.is_running] == ["php@8.1"]


def test_parse_services_list_empty() -> None:
    assert parse_services_list("") == []
    assert parse_services_list("Name Status User File\n") == []


def test_list_formulas() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([], stdout="git\nphp\nphp@8.1\n\n")) as run:
        assert Homebrew().list_formulas() == ["git", "php", "php@8.1"]
    assert run.call_args.args[0] == ["brew", "list", "--formula", "-1"]


def test_installed_versions_takes_matching_row() -> None:
    output = "php@8.1 8.1.27 8.1.26\n"
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([], stdout=output)):
        assert Homebrew().installed_versions("php@8.1") == ["8.1.27", "8.1.26"]


def test_installed_versions_missing_formula() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([], returncode=1)):
        assert Homebrew().installed_versions("php@5.6") == []


def test_link_uses_force_overwrite() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([])) as run:
        Homebrew().link_formula("php@8.2")
    assert run.call_args.args[0] == ["brew", "link", "--force", "--overwrite", "php@8.2"]


def test_failed_command_raises_brew_error() -> None:
    failed = _completed([], returncode=1, stderr="Error: No such keg: /opt/homebrew/Cellar/php@9.9\n")
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=failed):
        with pytest.raises(BrewCommandError) as exc_info:
            Homebrew().unlink_formula("php@9.9")
    assert exc_info.value.returncode == 1
    assert "No such keg" in str(exc_info.value)


def test_missing_executable_is_normalized() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", side_effect=FileNotFoundError("brew")):
        with pytest.raises(BrewCommandError) as exc_info:
            Homebrew().list_services()
    assert exc_info.value.returncode == 127
    assert "not found" in str(exc_info.value)


def test_control_service_validates_action() -> None:
    with pytest.raises(ValueError):
        Homebrew().control_service("reload", "php@8.1")


def test_control_service_runs_brew_services() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([])) as run:
        Homebrew().control_service("restart", "php@8.1")
    assert run.call_args.args[0] == ["brew", "services", "restart", "php@8.1"]


def test_install_streams_output() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([])) as run:
        Homebrew().install_formula("php@8.3")
    assert run.call_args.args[0] == ["brew", "install", "php@8.3"]
    assert run.call_args.kwargs["capture_output"] is False


def test_is_available_checks_path() -> None:
    with patch("sphp_cli.brew.homebrew.shutil.which", return_value=None):
        assert Homebrew().is_available() is False
    with patch("sphp_cli.brew.homebrew.shutil.which", return_value="/opt/homebrew/bin/brew"):
        assert Homebrew().is_available() is True


def test_bootstrap_failure_raises() -> None:
    with patch("sphp_cli.brew.homebrew.subprocess.run", return_value=_completed([], returncode=1)) as run:
        with pytest.raises(BrewCommandError):
            Homebrew().bootstrap()
    assert "install.sh" in run.call_args.args[0]
    assert run.call_args.kwargs["shell"] is True


def test_service_state_parse() -> None:
    assert ServiceState.parse("started") is ServiceState.STARTED
    assert ServiceState.parse("none") is ServiceState.STOPPED
    assert ServiceState.parse("scheduled") is ServiceState.OTHER


def test_installed_package_runtime_version() -> None:
    assert InstalledPackage("php", "8.3.4").runtime_version == RuntimeVersion(8, 3)
    assert InstalledPackage("php@8.1", "8.1.27").is_pinned
    assert not InstalledPackage("php", "8.3.4").is_pinned
