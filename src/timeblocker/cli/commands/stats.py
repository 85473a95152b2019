"""Statistics command."""

from datetime import timedelta

import click
from timeblocker.cli.date_filters import resolve_cli_date_range
from timeblocker.domain.categories import resolve_category
from timeblocker.domain.entities import Track
from timeblocker.domain.statistics import StatisticsService
from timeblocker.utils.date_parser import get_date_range, to_date_string


def format_duration(minutes: int) -> str:
    """Format minutes as "45m" or "2h 5m"."""
    hours, rest = divmod(minutes, 60)
    if hours == 0:
        return f"{rest}m"
    return f"{hours}h {rest}m"


@click.command("stats")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last monday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--last-7-days", is_flag=True, help="The last seven days including today (default)")
@click.option("--this-week", is_flag=True, help="Current week")
@click.option("--last-week", is_flag=True, help="Previous week")
@click.option("--this-month", is_flag=True, help="Current month")
@click.option("--last-month", is_flag=True, help="Previous month")
@click.option("--plan", is_flag=True, help="Aggregate the plan track instead of the actual track")
@click.pass_context
def stats(
    ctx,
    start_date: str | None,
    end_date: str | None,
    last_7_days: bool,
    this_week: bool,
    last_week: bool,
    this_month: bool,
    last_month: bool,
    plan: bool,
):
    """Show time spent per category over a date range."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "last-7-days": last_7_days,
            "this-week": this_week,
            "last-week": last_week,
            "this-month": this_month,
            "last-month": last_month,
        },
        default_range=get_date_range("last-7-days"),
    )
    # A single explicit bound gets a seven day window on the other side.
    if start is None:
        start = end - timedelta(days=6)
    if end is None:
        end = start + timedelta(days=6)

    track = Track.PLAN if plan else Track.ACTUAL
    report = StatisticsService(ctx.obj["store"]).aggregate(start, end, track)

    click.echo(f"\nStatistics {to_date_string(start)} .. {to_date_string(end)} ({track.value})")
    if report.days_skipped:
        click.echo(f"Skipped {report.days_skipped} unreadable day(s).")
    if not report.categories:
        click.echo("No data recorded in this range.")
        return

    click.echo("-" * 50)
    for stat in report.categories:
        name = resolve_category(stat.category_id).name
        click.echo(
            f"{name:<20} {format_duration(stat.total_minutes):>12} {stat.percentage:>8.1f}%"
        )
    click.echo("-" * 50)
    click.echo(f"{'Total':<20} {format_duration(report.total_minutes):>12}")


def register_commands(cli):
    """Register stats command with main CLI."""
    cli.add_command(stats)
