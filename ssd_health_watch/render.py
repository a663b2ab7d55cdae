"""Console table rendering for the health dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import click

from ssd_health_watch.config import DisplayConfig
from ssd_health_watch.models import HealthLevel, HealthRow

BAR_SEGMENTS = 10
EMPTY_TABLE_MESSAGE = "No disks reported by smartctl."

LEVEL_STYLES = {
    HealthLevel.OK: {"fg": "green"},
    HealthLevel.WARN: {"fg": "yellow"},
    HealthLevel.CRIT: {"fg": "red"},
    HealthLevel.UNKNOWN: {"fg": "bright_black"},
}


def health_bar(percent: int | None) -> str:
    """Render a fixed-width bar, e.g. 45 -> "[#####.....]"."""
    value = min(max(percent or 0, 0), 100)
    filled = (value + 5) // 10  # round half up
    return "[" + "#" * filled + "." * (BAR_SEGMENTS - filled) + "]"


def format_health_percent(percent: int | None) -> str:
    if percent is None:
        return "N/A"
    return f"{percent:>3}"


@dataclass
class Column:
    """A table column: header, value projection and computed width."""

    name: str
    header: str
    getter: Callable[[HealthRow], str | None]
    width: int = 0

    def cell(self, row: HealthRow) -> str:
        value = self.getter(row)
        return "" if value is None else str(value)


def build_columns() -> list[Column]:
    """Return a fresh column set (widths are per render)."""
    return [
        Column("device", "Device", lambda r: r.device_path),
        Column("detected", "Detected -d", lambda r: r.detected_driver),
        Column("bridge", "Bridge", lambda r: r.bridge_label),
        Column("protocol", "Protocol", lambda r: r.protocol),
        Column("model", "Model", lambda r: r.model),
        Column("serial", "Serial", lambda r: r.serial),
        Column("health_pct", "Health (%)", lambda r: format_health_percent(r.health_percent)),
        Column("health_bar", "Health Bar", lambda r: health_bar(r.health_percent)),
        Column("method", "Method", lambda r: r.method),
    ]


class TableRenderer:
    """Renders health rows into aligned, optionally colored, text lines."""

    def __init__(self, display: DisplayConfig):
        self.display = display

    def render(self, rows: list[HealthRow]) -> list[str]:
        """Return header, separator and one line per row."""
        if not rows:
            return [EMPTY_TABLE_MESSAGE]

        columns = build_columns()
        for col in columns:
            col.width = max([len(col.header)] + [len(col.cell(r)) for r in rows])

        lines = [
            " ".join(col.header.ljust(col.width) for col in columns),
            " ".join("-" * col.width for col in columns),
        ]
        for row in rows:
            cells = []
            for col in columns:
                text = col.cell(row).ljust(col.width)
                if col.name == "health_bar":
                    text = self._colorize(text, row)
                cells.append(text)
            lines.append(" ".join(cells))

        return lines

    def _colorize(self, text: str, row: HealthRow) -> str:
        if not self.display.color:
            return text
        level = row.level(self.display.healthy_pct, self.display.warning_pct)
        return click.style(text, **LEVEL_STYLES[level])
