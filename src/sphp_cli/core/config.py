"""User configuration stored in ~/.sphp/config.toml.

Only the ``[switcher]`` section is read. Example::

    [switcher]
    brew_prefix = "/opt/homebrew"
    link_strategy = "symlink"
    update_shell_config = true
    start_service = true
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import toml  # type: ignore[import-untyped]

from .constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME, CONFIG_SECTION, LINK_STRATEGIES
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


def get_config_home() -> Path:
    """Return the switcher's config directory (SPHP_HOME overrides ~/.sphp)."""
    if env_home := os.environ.get("SPHP_HOME"):
        return Path(env_home)
    return Path.home() / CONFIG_DIR_NAME


def get_config_file() -> Path:
    return get_config_home() / CONFIG_FILE_NAME


@dataclass
class SwitcherConfig:
    """Effective switcher settings."""

    brew_prefix: str | None = None
    link_strategy: str = "symlink"
    update_shell_config: bool = True
    start_service: bool = True
    origins: dict[str, str] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.link_strategy not in LINK_STRATEGIES:
            raise ConfigError(
                f"Unknown link_strategy {self.link_strategy!r}; expected one of {', '.join(LINK_STRATEGIES)}"
            )

    @classmethod
    def setting_names(cls) -> list[str]:
        return [f.name for f in fields(cls) if f.name != "origins"]

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "SwitcherConfig":
        if not isinstance(data, dict):
            return cls()

        values: dict[str, Any] = {}
        origins: dict[str, str] = {}
        expected = {f.name: f.type for f in fields(cls) if f.name != "origins"}
        for name, annotation in expected.items():
            if name not in data:
                continue
            raw = data[name]
            wants_bool = "bool" in str(annotation)
            if wants_bool and not isinstance(raw, bool):
                logger.warning("Ignoring config value %s=%r: expected a boolean", name, raw)
                continue
            if not wants_bool and not isinstance(raw, str):
                logger.warning("Ignoring config value %s=%r: expected a string", name, raw)
                continue
            values[name] = raw
            origins[name] = "config"
        config = cls(**values)
        config.origins = origins
        return config

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "link_strategy": self.link_strategy,
            "update_shell_config": self.update_shell_config,
            "start_service": self.start_service,
        }
        if self.brew_prefix:
            payload["brew_prefix"] = self.brew_prefix
        return payload

    def origin(self, name: str) -> str:
        return self.origins.get(name, "default")


def load_config(config_file: Path | None = None) -> SwitcherConfig:
    """Load settings; a missing file yields defaults."""
    path = config_file or get_config_file()
    if not path.exists():
        return SwitcherConfig()
    try:
        data = toml.load(path)
    except toml.TomlDecodeError as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc
    return SwitcherConfig.from_dict(data.get(CONFIG_SECTION))


def _coerce(name: str, value: str) -> Any:
    if name in ("update_shell_config", "start_service"):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ConfigError(f"{name} expects a boolean, got {value!r}")
    return value.strip()


def set_config_value(name: str, value: str, config_file: Path | None = None) -> SwitcherConfig:
    """Persist a single ``[switcher]`` setting and return the new effective config."""
    if name not in SwitcherConfig.setting_names():
        raise ConfigError(
            f"Unknown setting {name!r}; expected one of {', '.join(SwitcherConfig.setting_names())}"
        )
    path = config_file or get_config_file()

    data: dict[str, Any] = {}
    if path.exists():
        data = toml.load(path)
    section = data.get(CONFIG_SECTION)
    if not isinstance(section, dict):
        section = {}
        data[CONFIG_SECTION] = section

    section[name] = _coerce(name, value)
    # Validate before writing so a bad value never lands on disk.
    updated = SwitcherConfig.from_dict(section)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        toml.dump(data, f)
    return updated


__all__ = [
    "SwitcherConfig",
    "get_config_file",
    "get_config_home",
    "load_config",
    "set_config_value",
]
