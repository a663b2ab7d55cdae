"""smartctl process invocation."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Any

from ssd_health_watch.config import SmartctlConfig

logger = logging.getLogger(__name__)


class SmartctlNotFoundError(FileNotFoundError):
    """smartctl is not installed at the configured location."""


class ScanError(RuntimeError):
    """Device enumeration produced nothing usable; aborts the whole cycle."""


class ProbeError(RuntimeError):
    """A single `-d` candidate could not be queried."""


class Smartctl:
    """Thin wrapper around the smartctl binary with bounded waits."""

    def __init__(self, config: SmartctlConfig):
        self.path = config.path
        self.scan_timeout = config.scan_timeout_seconds
        self.probe_timeout = config.probe_timeout_seconds

    def ensure_available(self) -> str:
        """Return the resolved smartctl path or raise SmartctlNotFoundError."""
        if Path(self.path).is_file():
            return self.path

        resolved = shutil.which(self.path)
        if resolved:
            return resolved

        raise SmartctlNotFoundError(f"smartctl not found at {self.path}")

    def scan(self) -> str:
        """Run `smartctl --scan-open` and return its stdout."""
        cmd = [self.path, "--scan-open"]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.scan_timeout,
            )
        except FileNotFoundError as e:
            raise SmartctlNotFoundError(f"smartctl not found at {self.path}") from e
        except subprocess.TimeoutExpired as e:
            raise ScanError(
                f"smartctl --scan-open timed out after {self.scan_timeout}s"
            ) from e

        if result.returncode != 0 and result.stderr.strip():
            logger.debug(f"smartctl --scan-open exited {result.returncode}: {result.stderr.strip()}")

        return result.stdout

    def query(self, device: str, driver: str) -> str:
        """Run `smartctl -a -j -d <driver> <device>` and return its stdout."""
        cmd = [self.path, "-a", "-j", "-d", driver, device]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.probe_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeError(
                f"{device} -d {driver}: timed out after {self.probe_timeout}s"
            ) from e
        except OSError as e:
            raise ProbeError(f"{device} -d {driver}: {e}") from e

        # smartctl returns non-zero for various warnings, the output decides
        return result.stdout


def parse_telemetry(text: str | None) -> dict[str, Any] | None:
    """Return the JSON object in smartctl output, or None if it isn't one."""
    if not text:
        return None

    stripped = text.strip()
    if not stripped.startswith("{"):
        return None

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return None

    return data if isinstance(data, dict) else None
