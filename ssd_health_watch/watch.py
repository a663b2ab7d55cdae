"""Live dashboard refresh loop."""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Callable

import click

from ssd_health_watch.config import DisplayConfig
from ssd_health_watch.models import HealthRow
from ssd_health_watch.render import TableRenderer
from ssd_health_watch.smartctl import ScanError

logger = logging.getLogger(__name__)


class Dashboard:
    """Clears the console and paints one frame per refresh cycle."""

    def __init__(
        self,
        display: DisplayConfig,
        interval_seconds: int,
        echo: Callable[[str], None] = click.echo,
        clear: Callable[[], None] = click.clear,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.display = display
        self.interval_seconds = interval_seconds
        self.renderer = TableRenderer(display)
        self.echo = echo
        self.clear = clear
        self.clock = clock

    def header(self) -> str:
        now = self.clock().strftime("%Y-%m-%d %H:%M:%S")
        return f"{self.display.title} | {now} | Interval:{self.interval_seconds}s"

    def paint(self, rows: list[HealthRow] | None, error: str | None = None) -> int:
        """Paint a frame and return the number of table lines written."""
        self.clear()
        self.echo(self.header())
        self.echo("")

        lines = [error] if error else self.renderer.render(rows or [])
        for line in lines:
            self.echo(line)
        return len(lines)


def collect_cycle(
    collect: Callable[[], list[HealthRow]],
) -> tuple[list[HealthRow] | None, str | None]:
    """Run one collection, returning (rows, None) or (None, error message)."""
    try:
        return collect(), None
    except ScanError as e:
        logger.warning(f"Scan failed: {e}")
        return None, str(e)
    except Exception as e:
        logger.exception(f"Collection failed: {e}")
        return None, f"Collection failed: {e}"


def run_watch(
    collect: Callable[[], list[HealthRow]],
    dashboard: Dashboard,
    interval_seconds: int,
    sleep: Callable[[float], None] = time.sleep,
    stop: threading.Event | None = None,
    max_cycles: int | None = None,
) -> int:
    """
    Collect and repaint forever (or until stopped).

    Collection happens while the previous frame is still on screen; the
    screen is cleared only once new rows or an error message are ready.
    Errors during collection never end the loop. Errors while painting do.

    Returns the number of completed cycles.
    """
    cycles = 0

    while stop is None or not stop.is_set():
        rows, error = collect_cycle(collect)
        last_line_count = dashboard.paint(rows, error)
        cycles += 1
        logger.debug(f"Cycle {cycles} painted {last_line_count} line(s)")

        if max_cycles is not None and cycles >= max_cycles:
            break
        if stop is not None and stop.is_set():
            break

        sleep(interval_seconds)

    return cycles
