"""Data models for SSD health watch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HealthLevel(str, Enum):
    """Health classification of a single drive."""

    OK = "OK"
    WARN = "WARN"
    CRIT = "CRIT"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.value

    @property
    def severity(self) -> int:
        """Return numeric severity for comparison (higher = worse)."""
        return {"OK": 0, "UNKNOWN": 0, "WARN": 1, "CRIT": 2}[self.value]

    @classmethod
    def classify(
        cls,
        percent: int | None,
        healthy_pct: int = 80,
        warning_pct: int = 40,
    ) -> HealthLevel:
        """Classify a health percentage against the display thresholds."""
        if percent is None:
            return cls.UNKNOWN
        if percent >= healthy_pct:
            return cls.OK
        if percent >= warning_pct:
            return cls.WARN
        return cls.CRIT


@dataclass(frozen=True)
class DeviceTarget:
    """A device reported by `smartctl --scan-open`."""

    device_path: str
    hinted_driver: str | None = None


@dataclass(frozen=True)
class UnrecognizedLine:
    """A scan output line that matched none of the known device shapes."""

    text: str


@dataclass(frozen=True)
class NvmeHealthLog:
    """Fields consumed from `nvme_smart_health_information_log`."""

    percentage_used: Any = None


@dataclass(frozen=True)
class AtaAttribute:
    """One row of `ata_smart_attributes.table`."""

    name: str = ""
    value: Any = None  # normalized value
    raw_value: Any = None


@dataclass(frozen=True)
class TelemetryDocument:
    """Parsed `smartctl -a -j` output, reduced to the fields we consume.

    Every field is optional. smartctl emits different sections depending on
    the protocol it managed to speak with the drive, so absence is normal.
    """

    protocol: str | None = None
    nvme_log: NvmeHealthLog | None = None
    ata_attributes: tuple[AtaAttribute, ...] = ()
    model: str | None = None
    serial_number: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TelemetryDocument:
        """Decode a smartctl JSON document, ignoring malformed sections."""
        protocol = _text(data.get("protocol"))
        if protocol is None:
            device = data.get("device")
            if isinstance(device, dict):
                protocol = _text(device.get("protocol"))

        nvme_log = None
        nvme_data = data.get("nvme_smart_health_information_log")
        if isinstance(nvme_data, dict):
            nvme_log = NvmeHealthLog(percentage_used=nvme_data.get("percentage_used"))

        attributes: list[AtaAttribute] = []
        ata_data = data.get("ata_smart_attributes")
        table = ata_data.get("table") if isinstance(ata_data, dict) else None
        if isinstance(table, list):
            for row in table:
                if not isinstance(row, dict):
                    continue
                raw = row.get("raw")
                attributes.append(
                    AtaAttribute(
                        name=_text(row.get("name")) or "",
                        value=row.get("value"),
                        raw_value=raw.get("value") if isinstance(raw, dict) else None,
                    )
                )

        return cls(
            protocol=protocol,
            nvme_log=nvme_log,
            ata_attributes=tuple(attributes),
            model=_text(data.get("model_name")) or _text(data.get("device_model")),
            serial_number=_text(data.get("serial_number")),
        )


@dataclass(frozen=True)
class HealthResult:
    """Outcome of health extraction for one telemetry document."""

    percent: int | None = None
    method: str | None = None
    protocol: str | None = None

    def __post_init__(self) -> None:
        if self.percent is not None and not 0 <= self.percent <= 100:
            raise ValueError(f"Health percent out of range: {self.percent}")
        if (self.percent is None) != (self.method is None):
            raise ValueError("Health method must be set exactly when percent is set")

    @property
    def found(self) -> bool:
        return self.percent is not None


@dataclass(frozen=True)
class HealthRow:
    """One dashboard row per discovered device."""

    device_path: str
    detected_driver: str | None = None
    bridge_label: str | None = None
    protocol: str | None = None
    model: str | None = None
    serial: str | None = None
    health: HealthResult = field(default_factory=HealthResult)

    @property
    def health_percent(self) -> int | None:
        return self.health.percent

    @property
    def method(self) -> str | None:
        return self.health.method

    def level(self, healthy_pct: int = 80, warning_pct: int = 40) -> HealthLevel:
        """Return the health level of this row."""
        return HealthLevel.classify(self.health_percent, healthy_pct, warning_pct)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "device": self.device_path,
            "detected_driver": self.detected_driver,
            "bridge": self.bridge_label,
            "protocol": self.protocol,
            "model": self.model,
            "serial": self.serial,
            "health_percent": self.health_percent,
            "method": self.method,
        }


def _text(value: Any) -> str | None:
    """Return a stripped string, or None for missing/blank/non-scalar values."""
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None
