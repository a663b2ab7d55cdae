"""Driver-type discovery: find the `-d` candidate that yields usable telemetry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ssd_health_watch.drivers import get_driver_candidates
from ssd_health_watch.health import extract_health
from ssd_health_watch.models import DeviceTarget, HealthResult, TelemetryDocument
from ssd_health_watch.smartctl import ProbeError, Smartctl, parse_telemetry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeOutcome:
    """Result of probing one device across its driver candidates."""

    detected_driver: str | None = None
    document: TelemetryDocument | None = None
    health: HealthResult = field(default_factory=HealthResult)
    attempts: tuple[str, ...] = ()

    @property
    def model(self) -> str | None:
        return self.document.model if self.document else None

    @property
    def serial(self) -> str | None:
        return self.document.serial_number if self.document else None


class ProbeEngine:
    """Try driver candidates in order until one exposes a health value."""

    def __init__(self, smartctl: Smartctl):
        self.smartctl = smartctl

    def probe(self, target: DeviceTarget) -> ProbeOutcome:
        """
        Probe a device target.

        The first candidate whose telemetry yields a health percentage wins.
        If none does, the first candidate that returned parseable JSON is
        reported together with that document's model, serial and protocol.
        """
        candidates = get_driver_candidates(target.device_path, target.hinted_driver)
        first_driver: str | None = None
        first_document: TelemetryDocument | None = None
        attempts: list[str] = []

        for driver in candidates:
            attempts.append(driver)
            document = self._query(target.device_path, driver)
            if document is None:
                continue

            health = extract_health(document)
            if health.found:
                logger.debug(
                    f"{target.device_path}: -d {driver} -> {health.percent}% ({health.method})"
                )
                return ProbeOutcome(
                    detected_driver=driver,
                    document=_fill_identity(document, first_document),
                    health=health,
                    attempts=tuple(attempts),
                )

            if first_document is None:
                first_driver = driver
                first_document = document

        if first_document is None:
            logger.debug(
                f"{target.device_path}: no usable telemetry from {len(candidates)} candidates"
            )
            return ProbeOutcome(attempts=tuple(attempts))

        return ProbeOutcome(
            detected_driver=first_driver,
            document=first_document,
            health=HealthResult(protocol=first_document.protocol),
            attempts=tuple(attempts),
        )

    def _query(self, device: str, driver: str) -> TelemetryDocument | None:
        """Run one candidate, returning None for errors or non-JSON output."""
        try:
            text = self.smartctl.query(device, driver)
        except ProbeError as e:
            logger.debug(f"Probe failed: {e}")
            return None

        data = parse_telemetry(text)
        if data is None:
            logger.debug(f"{device} -d {driver}: no JSON telemetry")
            return None

        return TelemetryDocument.from_dict(data)


def _fill_identity(
    document: TelemetryDocument,
    fallback: TelemetryDocument | None,
) -> TelemetryDocument:
    """Fill a missing model/serial from an earlier candidate's document."""
    if fallback is None or (document.model and document.serial_number):
        return document

    return replace(
        document,
        model=document.model or fallback.model,
        serial_number=document.serial_number or fallback.serial_number,
    )
