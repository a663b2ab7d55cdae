"""Device discovery from `smartctl --scan-open` output."""

from __future__ import annotations

import logging
import re

from ssd_health_watch.models import DeviceTarget, UnrecognizedLine
from ssd_health_watch.smartctl import ScanError, Smartctl

logger = logging.getLogger(__name__)

# Known device shapes. Only NVMe controllers may omit the `-d` hint.
# Format: <device> [-d <type>] [# <comment>]
SCAN_PATTERNS = (
    re.compile(r"^(?P<dev>/dev/nvme\d+)(?:\s+-d\s+(?P<dtype>\S+))?", re.IGNORECASE),
    re.compile(r"^(?P<dev>\\\\\.\\PhysicalDrive\d+)\s+-d\s+(?P<dtype>\S+)", re.IGNORECASE),
    re.compile(r"^(?P<dev>/dev/sd\w+)\s+-d\s+(?P<dtype>\S+)", re.IGNORECASE),
)


def parse_scan_line(line: str) -> DeviceTarget | UnrecognizedLine:
    """Match one scan line against the known device-path shapes."""
    stripped = line.strip()
    for pattern in SCAN_PATTERNS:
        match = pattern.match(stripped)
        if match:
            return DeviceTarget(
                device_path=match.group("dev"),
                hinted_driver=match.group("dtype"),
            )
    return UnrecognizedLine(text=stripped)


def parse_scan_output(output: str) -> list[DeviceTarget]:
    """
    Parse `smartctl --scan-open` output into device targets.

    Raises ScanError if the output has no non-blank lines at all; lines that
    don't look like a supported device are skipped.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        raise ScanError("smartctl --scan-open found no devices")

    targets: list[DeviceTarget] = []
    for line in lines:
        parsed = parse_scan_line(line)
        if isinstance(parsed, UnrecognizedLine):
            logger.debug(f"Ignoring scan line: {parsed.text}")
            continue
        targets.append(parsed)

    return targets


def scan_devices(smartctl: Smartctl) -> list[DeviceTarget]:
    """Enumerate devices via smartctl."""
    return parse_scan_output(smartctl.scan())
