"""smartctl driver-type candidates and bridge labels.

USB bridge chips hide the drive's native protocol. smartctl can only reach
the drive when told which passthrough convention the bridge speaks, and
autodetection (`-d auto`) is unreliable for most USB-NVMe enclosures. We
therefore probe a vendor-ordered list of `-d` tokens.
"""

from __future__ import annotations

import re

NVME_DRIVER = "nvme"

# Internal/direct NVMe controllers as named by `smartctl --scan-open`
DIRECT_NVME_PATTERN = re.compile(r"^/dev/nvme\d+$")

# Probe order for USB-attached or otherwise ambiguous devices.
# JMicron bridges expose the NVMe namespace at a virtual NSID; firmware
# revisions differ on whether it is 1 or 2 and on decimal vs hex addressing.
USB_DRIVER_PRIORITY = (
    "sntjmicron,1",
    "sntjmicron,0x1",
    "sntjmicron,2",
    "sntjmicron,0x2",
    "sntjmicron",
    "sntrealtek",
    "sntasmedia",
    "sat,12",
    "sat,16",
    "sat",
    "scsi",
)

# (pattern, label) pairs, first match wins
BRIDGE_LABELS = (
    (re.compile(r"^sntjmicron", re.IGNORECASE), "JMicron USB-NVMe"),
    (re.compile(r"^sntrealtek", re.IGNORECASE), "Realtek USB-NVMe"),
    (re.compile(r"^sntasmedia", re.IGNORECASE), "ASMedia USB-NVMe"),
    (re.compile(r"^sat(,?\d+)?$", re.IGNORECASE), "USB-SATA (SAT passthrough)"),
    (re.compile(r"^scsi$", re.IGNORECASE), "USB-SCSI (generic)"),
    (re.compile(r"^nvme$", re.IGNORECASE), "Direct NVMe"),
)


def is_direct_nvme(device_path: str) -> bool:
    """Return True for internal NVMe controllers that need no translation."""
    return bool(DIRECT_NVME_PATTERN.match(device_path))


def get_driver_candidates(
    device_path: str,
    hinted_driver: str | None = None,
) -> list[str]:
    """
    Return the ordered, deduplicated `-d` tokens to try for a device.

    Direct NVMe paths get exactly one candidate. Everything else tries the
    scan hint first, then the USB bridge priority list.
    """
    if is_direct_nvme(device_path):
        return [NVME_DRIVER]

    candidates = [hinted_driver, *USB_DRIVER_PRIORITY]

    seen: set[str] = set()
    ordered: list[str] = []
    for driver in candidates:
        if not driver or driver in seen:
            continue
        seen.add(driver)
        ordered.append(driver)
    return ordered


def bridge_label(driver: str) -> str:
    """Map a driver-type token to a human-readable bridge description."""
    for pattern, label in BRIDGE_LABELS:
        if pattern.match(driver):
            return label
    return driver
