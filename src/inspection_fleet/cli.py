"""Command-line interface for the inspection fleet simulator."""

import json
import logging
from pathlib import Path

import click

from . import __version__
from .analytics import defect_rate, filter_systems
from .catalog import SystemStatus, TimeRange
from .config import Config
from .dashboard import FleetDashboard, SystemNotFoundError
from .generators import generate_history

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


def _dashboard(ctx: click.Context) -> FleetDashboard:
    return FleetDashboard(ctx.obj["config"])


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML config file (default: environment / .env)",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.pass_context
def main(ctx, config_path, verbose):
    """Inspection Fleet Simulator - deterministic fleet monitoring data.

    Generates a reproducible fleet of industrial inspection systems with
    status, uptime, throughput and defect statistics, and prints the fleet
    list, per-system detail and fleet-wide reports.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config"] = Config.from_yaml(config_path) if config_path else Config.from_env()


@main.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path("config"),
    help="Output directory for config files",
)
def init(output):
    """Generate a sample configuration file."""
    output.mkdir(parents=True, exist_ok=True)

    cfg = Config.default()
    config_path = output / "config.yaml"
    cfg.to_yaml(config_path)

    click.echo(f"Created: {config_path}")
    click.echo()
    click.echo("Edit the config file to customize:")
    click.echo("  - Fleet size and base seed")
    click.echo("  - History length and base date")
    click.echo("  - Report limits and trend window")
    click.echo()
    click.echo(f"Run with: fleet-sim --config {config_path} report")


@main.command()
@click.option(
    "--status",
    "-s",
    type=click.Choice([s.value for s in SystemStatus]),
    default=None,
    help="Only show systems with this status",
)
@click.option("--location", "-l", default=None, help="Only show systems at this location")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_context
def fleet(ctx, status, location, as_json):
    """List the inspection systems of the fleet."""
    dashboard = _dashboard(ctx)
    all_systems = dashboard.systems
    systems = filter_systems(
        all_systems,
        status=SystemStatus(status) if status else None,
        location=location,
    )

    if as_json:
        _echo_json([s.to_dict() for s in systems])
        return

    click.echo(f"{len(systems)} of {len(all_systems)} systems")
    click.echo("-" * 72)
    for s in systems:
        click.echo(
            f"{s.id:<12} {s.status.value:<12} {s.uptime:>3}%  "
            f"{s.units_inspected.daily:>5}/day  {s.location}"
        )


@main.command()
@click.argument("system_id")
@click.option(
    "--range",
    "-r",
    "time_range",
    type=click.Choice([t.value for t in TimeRange]),
    default=None,
    help="History window (default from config)",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_context
def system(ctx, system_id, time_range, as_json):
    """Show detail for one inspection system."""
    dashboard = _dashboard(ctx)
    try:
        report = dashboard.system_report(
            system_id, TimeRange(time_range) if time_range else None
        )
    except SystemNotFoundError:
        raise click.BadParameter(f"Unknown system: {system_id}", param_hint="SYSTEM_ID")

    if as_json:
        _echo_json(report)
        return

    sys_data = report["system"]
    asset = report["asset"]
    perf = report["performance"]

    click.echo(f"{sys_data['name']} ({sys_data['id']})")
    click.echo("=" * 40)
    click.echo(f"Location:     {sys_data['location']}")
    click.echo(f"Status:       {sys_data['status']}")
    click.echo(f"Uptime:       {sys_data['uptime']}%")
    click.echo(f"Asset:        {asset['manufacturer']} {asset['model']} [{asset['serial_number']}]")
    click.echo(f"Engineer:     {asset['field_engineer']}")
    click.echo()
    click.echo(f"Last {report['time_range']}:")
    click.echo(f"  Units inspected:  {perf['total_units']}")
    click.echo(f"  Defects:          {perf['total_defects']}")
    click.echo(f"  Avg defect rate:  {perf['avg_defect_rate']:.2f}%")
    trend = perf["throughput_trend"]
    click.echo(f"  Throughput trend: {'+' if trend >= 0 else ''}{trend:.1f}%")
    click.echo()
    click.echo("Defect types:")
    for d in report["defect_breakdown"]:
        click.echo(f"  {d['label']:<22} {d['count']:>4}  {d['severity']:<6} {d['percentage']}%")


@main.command()
@click.argument("system_id")
@click.option("--days", "-d", type=int, default=30, help="Number of days (default: 30)")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_context
def history(ctx, system_id, days, as_json):
    """Print the daily inspection history of a system."""
    points = generate_history(system_id, days, ctx.obj["config"].generator.base_date)

    if as_json:
        _echo_json([p.to_dict() for p in points])
        return

    for p in points:
        click.echo(
            f"{p.timestamp.isoformat()}  units={p.units_inspected:<5} "
            f"defects={p.defects_detected:<3} rate={defect_rate(p):.2f}%"
        )


@main.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print JSON")
@click.pass_context
def report(ctx, as_json):
    """Print the fleet-wide report."""
    data = _dashboard(ctx).fleet_report()

    if as_json:
        _echo_json(data)
        return

    metrics = data["metrics"]
    units = metrics["total_units_inspected"]
    defects = metrics["total_defects"]

    click.echo("Fleet Report")
    click.echo("=" * 40)
    click.echo(
        f"Systems: {metrics['total_systems']} "
        f"(online {metrics['online_systems']}, offline {metrics['offline_systems']}, "
        f"maintenance {metrics['maintenance_systems']})"
    )
    click.echo(f"Online share:   {data['online_share_pct']}% of fleet")
    click.echo(f"Average uptime: {metrics['average_uptime']}%")
    click.echo(f"Units: {units['daily']}/day, {units['weekly']}/week, {units['monthly']}/month")
    click.echo(f"Defects: high {defects['high']}, medium {defects['medium']}, low {defects['low']}")
    click.echo()
    click.echo(f"Top performers:   {', '.join(data['top_performers'])}")
    click.echo(f"Under performers: {', '.join(data['under_performers'])}")
    click.echo()
    click.echo("Defect types:")
    for d in data["defect_types"]:
        click.echo(f"  {d['label']:<22} {d['count']:>5}  {d['severity']}")
    click.echo()
    click.echo("Locations:")
    for loc in data["locations"]:
        click.echo(
            f"  {loc['location']:<28} {loc['systems']:>2} systems  "
            f"{loc['avg_uptime']:>5}%  {loc['total_units']:>6}/day"
        )


if __name__ == "__main__":
    main()
