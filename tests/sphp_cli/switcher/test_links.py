"""Tests for sphp_cli.switcher.links -- symlink safety rules."""

from __future__ import annotations

import os

import pytest

from sphp_cli.core.exceptions import LinkFailure
from sphp_cli.core.versions import RuntimeVersion
from sphp_cli.switcher.links import (
    brew_relink,
    link_active,
    link_companion,
    resolve_target_binary,
    unlink_active,
)

V81 = RuntimeVersion(8, 1)


def test_unlink_removes_symlink(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@8.1", "8.1.27")
    fake_brew.activate("php@8.1")

    assert unlink_active(host, reporter) is True
    assert not host.paths.active_binary.is_symlink()
    assert not host.paths.active_binary.exists()


def test_unlink_never_deletes_regular_file(host, reporter) -> None:
    active = host.paths.active_binary
    active.write_text("#!/bin/sh\necho hand-placed\n", encoding="utf-8")

    assert unlink_active(host, reporter) is False
    assert active.read_text(encoding="utf-8").startswith("#!/bin/sh")
    assert any("not a symlink" in message for message in reporter.messages("warning"))


def test_unlink_with_nothing_active(host, reporter) -> None:
    assert unlink_active(host, reporter) is False
    assert reporter.records == []


def test_target_binary_prefers_versioned_bin(host, fake_brew) -> None:
    keg_binary = fake_brew.add_formula("php@8.1", "8.1.27")
    assert resolve_target_binary(host, "php@8.1", V81) == keg_binary

    legacy = host.paths.bin_dir / "php@8.1"
    legacy.write_text("PHP 8.1.27 (cli)\n", encoding="utf-8")
    assert resolve_target_binary(host, "php@8.1", V81) == legacy


def test_link_active_creates_symlink(host, fake_brew, reporter) -> None:
    keg_binary = fake_brew.add_formula("php@8.1", "8.1.27")

    target = link_active(host, "php@8.1", V81, reporter)

    assert target == keg_binary
    assert host.paths.active_binary.is_symlink()
    assert os.readlink(host.paths.active_binary) == str(keg_binary)


def test_link_active_overwrites_previous_symlink(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@7.4", "7.4.33")
    fake_brew.activate("php@7.4")
    keg_binary = fake_brew.add_formula("php@8.1", "8.1.27")

    link_active(host, "php@8.1", V81, reporter)

    assert os.readlink(host.paths.active_binary) == str(keg_binary)


def test_link_active_missing_binary_is_fatal(host, reporter) -> None:
    with pytest.raises(LinkFailure) as exc_info:
        link_active(host, "php@8.1", V81, reporter)
    assert "8.1" in str(exc_info.value)


def test_link_active_refuses_regular_file(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@8.1", "8.1.27")
    host.paths.active_binary.write_text("manual\n", encoding="utf-8")

    with pytest.raises(LinkFailure):
        link_active(host, "php@8.1", V81, reporter)
    assert host.paths.active_binary.read_text(encoding="utf-8") == "manual\n"


def test_companion_missing_is_warning(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@8.1", "8.1.27", fpm=False)

    assert link_companion(host, "php@8.1", V81, reporter) is None
    assert any("PHP-FPM 8.1 not found" in message for message in reporter.messages("warning"))
    assert not host.paths.active_fpm.exists()


def test_companion_is_relinked(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@8.1", "8.1.27")

    target = link_companion(host, "php@8.1", V81, reporter)

    assert target == host.paths.opt_dir / "php@8.1" / "sbin" / "php-fpm"
    assert host.paths.active_fpm.is_symlink()


def test_brew_relink_unlinks_family_then_links(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@7.4", "7.4.33")
    fake_brew.add_formula("php@8.1", "8.1.27")
    fake_brew.activate("php@7.4")

    brew_relink(host, "php@8.1", V81, reporter)

    assert ("unlink", "php@7.4") in fake_brew.calls
    assert ("link", "php@8.1") in fake_brew.calls
    assert "php@8.1" in os.readlink(host.paths.active_binary)
    assert ("unlink", "git") not in fake_brew.calls


def test_brew_relink_refuses_regular_file(host, fake_brew, reporter) -> None:
    fake_brew.add_formula("php@8.1", "8.1.27")
    host.paths.active_binary.write_text("manual\n", encoding="utf-8")

    with pytest.raises(LinkFailure):
        brew_relink(host, "php@8.1", V81, reporter)
    assert ("link", "php@8.1") not in fake_brew.calls
