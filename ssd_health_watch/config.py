"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


def default_smartctl_path() -> str:
    """Return the smartctl location smartmontools installs by default."""
    if os.name == "nt":
        program_files = os.environ.get("ProgramFiles", r"C:\Program Files")
        return str(Path(program_files) / "smartmontools" / "bin" / "smartctl.exe")
    return "smartctl"


@dataclass
class SmartctlConfig:
    """smartctl invocation configuration."""

    path: str = field(default_factory=default_smartctl_path)
    scan_timeout_seconds: int = 60
    probe_timeout_seconds: int = 30  # per driver candidate


@dataclass
class WatchConfig:
    """Refresh loop configuration."""

    interval_seconds: int = 3


@dataclass
class DisplayConfig:
    """Dashboard rendering configuration."""

    title: str = "SSD Health Watch"
    color: bool = True
    healthy_pct: int = 80  # green at or above
    warning_pct: int = 40  # yellow at or above, red below


@dataclass
class Config:
    """Root configuration."""

    smartctl: SmartctlConfig = field(default_factory=SmartctlConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Create Config from dictionary."""
        config = cls()

        # smartctl
        if "smartctl" in data:
            smartctl_data = data["smartctl"]
            config.smartctl = SmartctlConfig(
                path=smartctl_data.get("path") or default_smartctl_path(),
                scan_timeout_seconds=smartctl_data.get("scan_timeout_seconds", 60),
                probe_timeout_seconds=smartctl_data.get("probe_timeout_seconds", 30),
            )

        # Watch loop
        if "watch" in data:
            watch_data = data["watch"]
            config.watch = WatchConfig(
                interval_seconds=watch_data.get("interval_seconds", 3),
            )

        # Display
        if "display" in data:
            display_data = data["display"]
            config.display = DisplayConfig(
                title=display_data.get("title", "SSD Health Watch"),
                color=display_data.get("color", True),
                healthy_pct=display_data.get("healthy_pct", 80),
                warning_pct=display_data.get("warning_pct", 40),
            )

        config.validate()
        return config

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> Config:
        """Create config from environment variables."""
        config = cls()

        if smartctl := os.environ.get("SHW_SMARTCTL"):
            config.smartctl.path = smartctl

        if interval := os.environ.get("SHW_INTERVAL"):
            config.watch.interval_seconds = int(interval)

        config.validate()
        return config

    def validate(self) -> None:
        """Reject settings the refresh loop cannot work with."""
        if self.watch.interval_seconds < 1:
            raise ValueError(
                f"watch.interval_seconds must be >= 1, got {self.watch.interval_seconds}"
            )
        if not 0 <= self.display.warning_pct <= self.display.healthy_pct <= 100:
            raise ValueError(
                "display thresholds must satisfy 0 <= warning_pct <= healthy_pct <= 100"
            )


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from file or defaults."""
    if path:
        return Config.from_yaml(path)

    # Check common locations
    for candidate in [
        Path("/etc/ssd-health-watch/config.yaml"),
        Path("config.yaml"),
    ]:
        if candidate.exists():
            return Config.from_yaml(candidate)

    # Fall back to defaults with env overrides
    return Config.from_env()
