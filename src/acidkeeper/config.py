"""Configuration management for Acidkeeper."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"^(\d+)\s*(ms|s|m|h|d)?$")
_UNIT_MS = {"ms": 1, "s": 1000, "m": 60 * 1000, "h": 60 * 60 * 1000, "d": 24 * 60 * 60 * 1000}


def parse_duration_ms(duration: str | int) -> int:
    """Parse a duration like '300s' or '5m' into milliseconds.

    Bare integers are taken as milliseconds.

    Args:
        duration: Duration string or integer.

    Returns:
        Duration in milliseconds.

    Raises:
        ValueError: If the format is invalid.
    """
    if isinstance(duration, int):
        return duration
    match = _DURATION_RE.match(str(duration).strip().lower())
    if not match:
        msg = f"Invalid duration format: '{duration}'. Use format like '300s' or '5m'."
        raise ValueError(msg)
    value, unit = match.groups()
    return int(value) * _UNIT_MS[unit or "ms"]


@dataclass
class AcidkeeperConfig:
    """Acidkeeper configuration with defaults, YAML override, and CLI override."""

    wait_timeout: str = "300s"
    blocking: bool = False
    pool_name: str | None = None
    service_factory: str | None = None
    log_level: str = "INFO"
    config_file: str | None = None
    spark_app_name: str = "acidkeeper"
    metastore_uris: str | None = None
    spark_conf: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path) -> AcidkeeperConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            An AcidkeeperConfig instance with values from the YAML file.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> AcidkeeperConfig:
        """Create config from a dictionary, ignoring unknown keys."""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        unknown = sorted(set(data) - valid_fields)
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**filtered)

    def merge_cli_overrides(self, **kwargs: Any) -> AcidkeeperConfig:
        """Return a new config with CLI overrides applied (non-None values only).

        Args:
            **kwargs: CLI parameter overrides.

        Returns:
            A new AcidkeeperConfig with overrides applied.
        """
        current = {f.name: getattr(self, f.name) for f in self.__dataclass_fields__.values()}
        for key, value in kwargs.items():
            if value is not None and key in current:
                current[key] = value
        current["spark_conf"] = dict(current["spark_conf"] or {})
        return AcidkeeperConfig(**current)

    def setup_logging(self) -> None:
        """Configure logging based on the log_level setting."""
        logging.basicConfig(
            level=getattr(logging, self.log_level.upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    @property
    def wait_timeout_ms(self) -> int:
        """Upper bound for a single poll backoff delay, in milliseconds."""
        return parse_duration_ms(self.wait_timeout)
