"""Idempotent PATH export management in the user's shell startup file."""

from __future__ import annotations

import logging
from pathlib import Path

from sphp_cli.core.constants import SHELL_RC_CANDIDATES

from .host import Host, Reporter

logger = logging.getLogger(__name__)


def find_shell_rc(home: Path) -> Path | None:
    """Return the first existing startup file in priority order."""
    for name in SHELL_RC_CANDIDATES:
        candidate = home / name
        if candidate.is_file():
            return candidate
    return None


def path_export_line(bin_dir: Path) -> str:
    return f'export PATH="{bin_dir}:$PATH"'


def _export_value(line: str) -> str | None:
    stripped = line.strip()
    if not stripped.startswith("export PATH="):
        return None
    return stripped[len("export PATH="):].strip("\"'")


def _exports_bin_dir(line: str, bin_dir: Path) -> bool:
    """True when ``bin_dir`` is one of the PATH components this line exports."""
    value = _export_value(line)
    if value is None:
        return False
    target = str(bin_dir).rstrip("/")
    return any(component.rstrip("/") == target for component in value.split(":"))


def _is_managed_export(line: str, bin_dir: Path) -> bool:
    value = _export_value(line)
    if value is None:
        return False
    return "php@" in value or line.strip() == path_export_line(bin_dir)


def rewrite_path_exports(content: str, bin_dir: Path) -> str:
    """Drop stale ``php@`` exports and make sure ``bin_dir`` is exported once.

    Lines written by the user are kept as they are. The managed export line
    is only appended when no remaining export already puts ``bin_dir`` on
    PATH.
    """
    kept = [line for line in content.splitlines(keepends=True) if not _is_managed_export(line, bin_dir)]
    if any(_exports_bin_dir(line, bin_dir) for line in kept):
        return "".join(kept)
    if kept and not kept[-1].endswith(("\n", "\r")):
        kept[-1] += "\n"
    kept.append(path_export_line(bin_dir) + "\n")
    return "".join(kept)


def update_shell_config(host: Host, reporter: Reporter) -> Path | None:
    """Rewrite the PATH entry in the first discovered startup file.

    No file is ever created. Returns the file that was inspected, or None
    when there is none or it cannot be read or written.
    """
    shell_rc = find_shell_rc(host.home)
    if shell_rc is None:
        reporter.warning("No shell configuration file found. You may need to update PATH manually.")
        return None

    bin_dir = host.paths.bin_dir
    try:
        original = shell_rc.read_bytes().decode("utf-8")
    except (OSError, UnicodeError) as exc:
        logger.warning("Cannot read %s: %s", shell_rc, exc)
        reporter.warning(f"Could not read {shell_rc}, update PATH manually: {exc}")
        return None

    updated = rewrite_path_exports(original, bin_dir)
    if updated == original:
        logger.debug("%s already exports %s", shell_rc, bin_dir)
        reporter.info(f"PATH in {shell_rc} is already up to date")
        return shell_rc

    reporter.info(f"Updating PATH in {shell_rc}...")
    try:
        shell_rc.write_bytes(updated.encode("utf-8"))
    except OSError as exc:
        logger.warning("Cannot write %s: %s", shell_rc, exc)
        reporter.warning(f"Could not update {shell_rc}, update PATH manually: {exc}")
        return None
    reporter.success(f"Updated PATH in {shell_rc}")
    return shell_rc


__all__ = ["find_shell_rc", "path_export_line", "rewrite_path_exports", "update_shell_config"]
