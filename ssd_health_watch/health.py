"""Wear-level health extraction from smartctl telemetry.

Strategies are tried in order; the first that yields a percentage wins.
Values outside the accepted range are rejected, never clamped.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from ssd_health_watch.models import AtaAttribute, HealthResult, TelemetryDocument

NVME_PROTOCOL = "NVMe"
ATA_PROTOCOL = "ATA/SATA"

# Vendor names for a "life remaining" attribute, value 100 = new
LIFE_REMAINING_ATTRS = frozenset(
    name.lower()
    for name in (
        "Percent_Lifetime_Remain",  # Crucial/Micron
        "Percent_Life_Remaining",
        "SSD_Life_Left",  # Kingston, SandForce
        "Remaining_Life",
        "Media_Wearout_Indicator",  # Intel
    )
)

# Samsung and others put remaining life in the normalized value of this one
WEAR_LEVELING_PATTERN = re.compile(r"Wear_Leveling_Count", re.IGNORECASE)
WEAR_LEVELING_METHOD = "Wear_Leveling_Count (normalized; vendor-specific)"

HealthStrategy = Callable[[TelemetryDocument], Optional[HealthResult]]


def to_int(value: Any) -> int | None:
    """Coerce a JSON scalar to int, returning None for anything non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"[+-]?\d+", text):
            return int(text)
    return None


def _in_range(value: int | None, low: int, high: int) -> bool:
    return value is not None and low <= value <= high


def nvme_percentage_used(document: TelemetryDocument) -> HealthResult | None:
    """Health = 100 - NVMe `percentage_used`."""
    if document.nvme_log is None:
        return None

    used = to_int(document.nvme_log.percentage_used)
    if not _in_range(used, 0, 100):
        return None

    return HealthResult(
        percent=100 - used,
        method=f"NVMe Percentage Used={used}%",
        protocol=document.protocol or NVME_PROTOCOL,
    )


def _life_remaining_value(attr: AtaAttribute) -> int | None:
    raw = to_int(attr.raw_value)
    if _in_range(raw, 0, 100):
        return raw

    normalized = to_int(attr.value)
    if _in_range(normalized, 0, 100):
        return normalized

    return None


def ata_life_remaining(document: TelemetryDocument) -> HealthResult | None:
    """Health from the first vendor "life remaining" attribute in table order."""
    for attr in document.ata_attributes:
        if attr.name.lower() not in LIFE_REMAINING_ATTRS:
            continue

        # Only the first named row counts, even if its values are unusable
        percent = _life_remaining_value(attr)
        if percent is None:
            return None
        return HealthResult(
            percent=percent,
            method=attr.name,
            protocol=document.protocol or ATA_PROTOCOL,
        )

    return None


def ata_wear_leveling_count(document: TelemetryDocument) -> HealthResult | None:
    """Health from the normalized Wear_Leveling_Count value."""
    for attr in document.ata_attributes:
        if not WEAR_LEVELING_PATTERN.search(attr.name):
            continue

        percent = to_int(attr.value)
        if not _in_range(percent, 1, 100):
            return None
        return HealthResult(
            percent=percent,
            method=WEAR_LEVELING_METHOD,
            protocol=document.protocol or ATA_PROTOCOL,
        )

    return None


HEALTH_STRATEGIES: tuple[HealthStrategy, ...] = (
    nvme_percentage_used,
    ata_life_remaining,
    ata_wear_leveling_count,
)


def extract_health(document: TelemetryDocument) -> HealthResult:
    """
    Derive a 0-100 health percentage from a telemetry document.

    Returns a HealthResult without a percent when no strategy applies; the
    document's own protocol is still reported in that case.
    """
    for strategy in HEALTH_STRATEGIES:
        result = strategy(document)
        if result is not None:
            return result

    return HealthResult(protocol=document.protocol)
