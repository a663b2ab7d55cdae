"""CLI entrypoints for SSD health watch."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from ssd_health_watch import __version__
from ssd_health_watch.collector import Collector
from ssd_health_watch.config import Config, load_config
from ssd_health_watch.drivers import bridge_label, get_driver_candidates
from ssd_health_watch.models import HealthLevel
from ssd_health_watch.render import TableRenderer
from ssd_health_watch.scanner import scan_devices
from ssd_health_watch.smartctl import ScanError, Smartctl, SmartctlNotFoundError
from ssd_health_watch.watch import Dashboard, run_watch

EXIT_PRECONDITION = 3


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=str(log_file) if log_file else None,
    )


def require_smartctl(cfg: Config) -> Smartctl:
    """Fail fast if smartctl is missing."""
    smartctl = Smartctl(cfg.smartctl)
    try:
        resolved = smartctl.ensure_available()
    except SmartctlNotFoundError as e:
        click.secho(str(e), fg="red", err=True)
        sys.exit(EXIT_PRECONDITION)

    logging.getLogger("shw").debug(f"Using smartctl at {resolved}")
    return smartctl


@click.group()
@click.version_option(version=__version__, prog_name="shw")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write log records to a file instead of stderr",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, log_file: Path | None) -> None:
    """SSD Health Watch - wear-level monitoring for NVMe and USB-bridged SSDs."""
    setup_logging(verbose, log_file)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "-n", "--interval",
    type=click.IntRange(min=1),
    default=None,
    help="Refresh interval in seconds, overrides config",
)
@click.option("--no-color", is_flag=True, help="Disable health bar colors")
@click.pass_context
def watch(
    ctx: click.Context,
    config: Path | None,
    interval: int | None,
    no_color: bool,
) -> None:
    """Show a continuously refreshing health dashboard."""
    cfg = load_config(config)
    if interval:
        cfg.watch.interval_seconds = interval
    if no_color:
        cfg.display.color = False

    smartctl = require_smartctl(cfg)
    collector = Collector(cfg, smartctl)
    dashboard = Dashboard(cfg.display, cfg.watch.interval_seconds)

    logger = logging.getLogger("shw.watch")
    logger.info(f"Starting watch loop (interval: {cfg.watch.interval_seconds}s)")

    try:
        run_watch(collector.collect, dashboard, cfg.watch.interval_seconds)
    except KeyboardInterrupt:
        logger.info("Watch loop stopped")


@main.command()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--json", "as_json", is_flag=True, help="Print rows as JSON")
@click.option("--no-color", is_flag=True, help="Disable health bar colors")
@click.pass_context
def snapshot(
    ctx: click.Context,
    config: Path | None,
    as_json: bool,
    no_color: bool,
) -> None:
    """Collect once, print the table and exit with a health status code."""
    cfg = load_config(config)
    if no_color:
        cfg.display.color = False

    smartctl = require_smartctl(cfg)
    collector = Collector(cfg, smartctl)

    try:
        rows = collector.collect()
    except ScanError as e:
        click.secho(str(e), fg="red", err=True)
        sys.exit(EXIT_PRECONDITION)

    if as_json:
        click.echo(json.dumps([row.to_dict() for row in rows], indent=2))
    else:
        for line in TableRenderer(cfg.display).render(rows):
            click.echo(line)

    levels = [row.level(cfg.display.healthy_pct, cfg.display.warning_pct) for row in rows]
    worst = max(levels, key=lambda level: level.severity, default=HealthLevel.OK)

    # Exit with appropriate code
    if worst == HealthLevel.CRIT:
        sys.exit(2)
    elif worst == HealthLevel.WARN:
        sys.exit(1)


@main.command()
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.pass_context
def scan(ctx: click.Context, config: Path | None) -> None:
    """List discovered devices and the drivers that would be probed."""
    cfg = load_config(config)
    smartctl = require_smartctl(cfg)

    try:
        targets = scan_devices(smartctl)
    except ScanError as e:
        click.secho(str(e), fg="red", err=True)
        sys.exit(EXIT_PRECONDITION)

    if not targets:
        click.secho("No supported devices in scan output", fg="yellow")
        return

    for target in sorted(targets, key=lambda t: t.device_path):
        hint = target.hinted_driver or "-"
        label = bridge_label(target.hinted_driver) if target.hinted_driver else "unknown"
        click.secho(f"{target.device_path}", bold=True, nl=False)
        click.echo(f"  hint: {hint} ({label})")
        candidates = get_driver_candidates(target.device_path, target.hinted_driver)
        click.echo(f"  candidates: {', '.join(candidates)}")


if __name__ == "__main__":
    main()
