"""Configuration values for systop."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from systop.dirsize import HOME_SUBDIRECTORIES

ENV_PREFIX = "SYSTOP_"
MIN_REFRESH_INTERVAL = 1.0


@dataclass(frozen=True)
class MonitorConfig:
    """Settings for sampling, ranking and display."""

    refresh_interval: float = 1.0  # seconds between provider reads
    poll_interval: float = 0.1  # seconds between UI ticks
    top_processes: int = 15
    max_interfaces: int = 4
    max_disks: int = 4
    max_subdirectories: int = 2
    home_subdirectories: tuple[str, ...] = HOME_SUBDIRECTORIES
    home_dir: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None

    def resolve_home(self) -> Path:
        """Return the directory to scan, defaulting to the user's home."""
        return self.home_dir if self.home_dir is not None else Path.home()


def _interval(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw!r} is not a number") from exc
    return max(MIN_REFRESH_INTERVAL, value)


def load_config(environ: Mapping[str, str] | None = None) -> MonitorConfig:
    """
    Build a MonitorConfig, applying SYSTOP_* environment overrides.

    Recognized variables: SYSTOP_LOG_LEVEL, SYSTOP_LOG_FILE, SYSTOP_HOME and
    SYSTOP_REFRESH_INTERVAL.

    Raises:
        ValueError: If SYSTOP_REFRESH_INTERVAL is not a number.
    """
    env = os.environ if environ is None else environ
    config = MonitorConfig()
    overrides: dict[str, object] = {}

    level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if level:
        overrides["log_level"] = level.upper()
    log_file = env.get(f"{ENV_PREFIX}LOG_FILE")
    if log_file:
        overrides["log_file"] = Path(log_file).expanduser()
    home = env.get(f"{ENV_PREFIX}HOME")
    if home:
        overrides["home_dir"] = Path(home).expanduser()
    interval = env.get(f"{ENV_PREFIX}REFRESH_INTERVAL")
    if interval:
        overrides["refresh_interval"] = _interval(f"{ENV_PREFIX}REFRESH_INTERVAL", interval)

    return replace(config, **overrides)
