"""Configuration management for devsweep."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


def parse_bool(value: Any, default: bool) -> bool:
    """Interpret YAML/env style booleans, falling back to ``default`` for None."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


def _default_config_home() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


@dataclass
class DevSweepConfig:
    """Configuration for a devsweep run."""

    # Module names never registered, even when requested
    modules_disabled: list[str] = field(default_factory=list)

    # Analyze selected modules concurrently (results keep request order)
    parallel_analysis: bool = True

    # Skip confirmation prompts for destructive modules
    assume_yes: bool = False

    # System temp/log files newer than this are reported as unsafe
    system_file_age_days: int = 7

    # Logging
    log_file: Path | None = None
    log_level: str = "WARNING"

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default configuration file path."""
        return _default_config_home() / "devsweep" / "config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> DevSweepConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Uses default if None.

        Returns:
            Loaded configuration, or defaults when the file does not exist.

        Raises:
            ValueError: If the file is not valid YAML or a value is out of range.

        """
        if config_path is None:
            config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        with config_path.open(encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid YAML in {config_path}: expected a mapping")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> DevSweepConfig:
        """Create config from dictionary."""
        config = cls()

        if "modules_disabled" in data:
            config.modules_disabled = [str(name) for name in data["modules_disabled"] or []]
        config.parallel_analysis = parse_bool(data.get("parallel_analysis"), config.parallel_analysis)
        config.assume_yes = parse_bool(data.get("assume_yes"), config.assume_yes)
        if "system_file_age_days" in data:
            config.system_file_age_days = int(data["system_file_age_days"])
            if config.system_file_age_days < 0:
                raise ValueError("system_file_age_days must not be negative")

        # Logging
        if "logging" in data:
            logging_cfg = data["logging"] or {}
            if logging_cfg.get("file"):
                config.log_file = Path(os.path.expanduser(logging_cfg["file"]))
            if "level" in logging_cfg:
                config.log_level = str(logging_cfg["level"]).upper()

        return config

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Uses default if None.

        """
        if config_path is None:
            config_path = self.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "modules_disabled": list(self.modules_disabled),
            "parallel_analysis": self.parallel_analysis,
            "assume_yes": self.assume_yes,
            "system_file_age_days": self.system_file_age_days,
            "logging": {
                "file": str(self.log_file) if self.log_file else None,
                "level": self.log_level,
            },
        }

        with config_path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
