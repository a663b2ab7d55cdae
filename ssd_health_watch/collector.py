"""Collector - scans devices, probes each one and builds dashboard rows."""

from __future__ import annotations

import logging

from ssd_health_watch.config import Config
from ssd_health_watch.drivers import bridge_label
from ssd_health_watch.models import DeviceTarget, HealthRow
from ssd_health_watch.probe import ProbeEngine, ProbeOutcome
from ssd_health_watch.scanner import scan_devices
from ssd_health_watch.smartctl import Smartctl

logger = logging.getLogger(__name__)


class Collector:
    """Orchestrates one collection cycle: scan, probe, aggregate."""

    def __init__(self, config: Config, smartctl: Smartctl | None = None):
        self.config = config
        self.smartctl = smartctl or Smartctl(config.smartctl)
        self.engine = ProbeEngine(self.smartctl)

    def collect(self) -> list[HealthRow]:
        """
        Build one row per discovered device, sorted by device path.

        Raises ScanError when enumeration yields nothing; a failure while
        probing a single device only degrades that device's row.
        """
        targets = scan_devices(self.smartctl)
        logger.debug(f"Scan found {len(targets)} device(s)")

        rows = [self._collect_row(target) for target in targets]
        return sorted(rows, key=lambda r: r.device_path)

    def _collect_row(self, target: DeviceTarget) -> HealthRow:
        """Probe a single device, degrading to an empty row on failure."""
        try:
            outcome = self.engine.probe(target)
        except Exception as e:
            logger.exception(f"Probe of {target.device_path} failed: {e}")
            outcome = ProbeOutcome()

        return build_row(target, outcome)


def build_row(target: DeviceTarget, outcome: ProbeOutcome) -> HealthRow:
    """Merge a scan target with its probe outcome."""
    label_source = outcome.detected_driver or target.hinted_driver

    return HealthRow(
        device_path=target.device_path,
        detected_driver=outcome.detected_driver,
        bridge_label=bridge_label(label_source) if label_source else None,
        protocol=outcome.health.protocol,
        model=outcome.model,
        serial=outcome.serial,
        health=outcome.health,
    )
