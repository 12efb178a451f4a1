"""
Section dashboard CLI.

Usage:
    section-dashboard show --config dashboard.yaml
    section-dashboard show --layout columns --columns 3
    section-dashboard json
    section-dashboard sections
    section-dashboard watch --interval 10
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from .config import DashboardConfig
from .dashboard import Dashboard
from .errors import DashboardError
from .layout import LAYOUTS, get_layout

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Dashboard config (YAML or TOML). Defaults to the first one found.",
)


def _load_dashboard(config_path: Path | None) -> Dashboard:
    try:
        return Dashboard(DashboardConfig.load(config_path))
    except DashboardError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Section dashboard: regenerable status sections in one document."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@config_option
@click.option("--layout", "layout_name", type=click.Choice(sorted(LAYOUTS)), help="Layout override")
@click.option("--columns", type=int, help="Column count for the columns layout")
def show(config_path: Path | None, layout_name: str | None, columns: int | None):
    """Regenerate once and print the dashboard."""
    dashboard = _load_dashboard(config_path)
    try:
        layout = get_layout(
            layout_name or dashboard.config.layout,
            columns=columns if columns is not None else dashboard.config.columns,
            width=dashboard.config.column_width,
        )
    except DashboardError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)
    result = dashboard.refresh()
    click.echo(dashboard.render(layout))
    if not result.ok:
        for error in result.errors:
            click.echo(f"error: {error}", err=True)
        sys.exit(1)


@cli.command("json")
@config_option
def json_command(config_path: Path | None):
    """Regenerate once and print blocks and section outcomes as JSON."""
    dashboard = _load_dashboard(config_path)
    result = dashboard.refresh()
    output = {
        "document": dashboard.document.to_dict(),
        "result": result.to_dict(),
    }
    click.echo(json.dumps(output, indent=2))
    if not result.ok:
        sys.exit(1)


@cli.command()
@config_option
def sections(config_path: Path | None):
    """List registered sections in rendering order."""
    dashboard = _load_dashboard(config_path)
    specs = dashboard.registry.list()
    if not specs:
        click.echo("No sections configured.")
        return
    for spec in specs:
        click.echo(f"{spec.tag or '-'}\t{spec.name}")


@cli.command()
@config_option
@click.option("--interval", "-i", type=int, help="Seconds between refreshes")
def watch(config_path: Path | None, interval: int | None):
    """Refresh and redisplay the dashboard until interrupted."""
    dashboard = _load_dashboard(config_path)
    dashboard.watch(interval=interval, echo=click.echo)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
