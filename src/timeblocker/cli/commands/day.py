"""Day commands: show, paint, note, export and days."""

from pathlib import Path
from typing import Sequence

import click
from timeblocker.cli.activity_resolution import resolve_activity_or_exit
from timeblocker.cli.date_filters import resolve_cli_date
from timeblocker.cli.error_handling import handle_domain_error
from timeblocker.domain.categories import resolve_category
from timeblocker.domain.days import DayService
from timeblocker.domain.entities import SubActivity, TimeSlot, Track
from timeblocker.domain.errors import DomainError
from timeblocker.domain.export import export_day
from timeblocker.domain.segments import compress_grid
from timeblocker.domain.sub_activities import SubActivityService
from timeblocker.domain.time_grid import (
    assign_slots,
    parse_time_label,
    set_note,
    SLOTS_PER_DAY,
)
from timeblocker.utils.date_parser import to_date_string

EMPTY_MARK = "·"


def track_option(func):
    return click.option("--actual", is_flag=True, help="Use the actual track instead of the plan")(func)


def selected_track(actual: bool) -> Track:
    return Track.ACTUAL if actual else Track.PLAN


def render_hour_rows(
    slots: Sequence[TimeSlot], track: Track, sub_activities: dict[str, SubActivity]
) -> list[str]:
    """Render one text row per hour from the hour-windowed segments."""
    rows = []
    for hour, segments in enumerate(compress_grid(slots, track)):
        cells = []
        for segment in segments:
            if segment.category_id is None:
                name = EMPTY_MARK
            else:
                name = resolve_category(segment.category_id).name
                sub = sub_activities.get(segment.sub_activity_id or "")
                if sub is not None and sub.parent_id == segment.category_id:
                    name = f"{name} - {sub.name}"
            cells.append(f"{name} x{segment.count}")
        rows.append(f"{hour:02d}:00  " + " | ".join(cells))
    return rows


def parse_range_or_exit(ctx, start: str, end: str) -> tuple[int, int]:
    """Parse START/END labels into a slot range."""
    try:
        start_index = parse_time_label(start)
        end_index = parse_time_label(end)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if start_index >= end_index or end_index > SLOTS_PER_DAY:
        click.echo(f"Error: End time {end} must be after start time {start}", err=True)
        ctx.exit(1)
    return start_index, end_index


@click.command("show")
@click.option("--date", "date_str", help="Day to show (YYYY-MM-DD or relative like 'yesterday'; default today)")
@track_option
@click.pass_context
def show_day(ctx, date_str: str | None, actual: bool):
    """Show a day as an hour grid."""
    store = ctx.obj["store"]
    day = resolve_cli_date(ctx, date_str)
    slots = DayService(store).load_day(day)
    sub_activities = SubActivityService(store).as_mapping()

    click.echo(f"\n{to_date_string(day)} ({selected_track(actual).value})")
    for row in render_hour_rows(slots, selected_track(actual), sub_activities):
        click.echo(row)


@click.command("paint")
@click.argument("start")
@click.argument("end")
@click.argument("category")
@click.option("--sub", help="Sub-activity name or ID under the category")
@click.option("--date", "date_str", help="Day to paint (default today)")
@track_option
@click.pass_context
def paint_day(ctx, start: str, end: str, category: str, sub: str | None, date_str: str | None, actual: bool):
    """Paint the slots from START up to END with CATEGORY.

    CATEGORY is a category ID or name; use "-" to erase.

    Examples:
        timeblocker paint 09:00 12:00 work
        timeblocker paint 13:00 13:30 学习 --sub "Reading" --actual
        timeblocker paint 22:00 24:00 -
    """
    store = ctx.obj["store"]
    day_service = DayService(store)
    day = resolve_cli_date(ctx, date_str)
    start_index, end_index = parse_range_or_exit(ctx, start, end)
    category_id, sub_id = resolve_activity_or_exit(ctx, SubActivityService(store), category, sub)

    try:
        slots = assign_slots(
            day_service.load_day(day), start_index, end_index, selected_track(actual), category_id, sub_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    day_service.save_day(day, slots)
    label = category if category_id is not None else "(erased)"
    click.echo(f"Painted {start}-{end} {label} on {to_date_string(day)} ({selected_track(actual).value})")


@click.command("note")
@click.argument("time")
@click.argument("text", required=False, default="")
@click.option("--date", "date_str", help="Day of the slot (default today)")
@click.pass_context
def note_slot(ctx, time: str, text: str, date_str: str | None):
    """Set the note of the slot starting at TIME; omit TEXT to clear it."""
    day_service = DayService(ctx.obj["store"])
    day = resolve_cli_date(ctx, date_str)

    try:
        index = parse_time_label(time)
        slots = set_note(day_service.load_day(day), index, text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    day_service.save_day(day, slots)
    if text.strip():
        click.echo(f"Saved note at {time} on {to_date_string(day)}")
    else:
        click.echo(f"Cleared note at {time} on {to_date_string(day)}")


@click.command("days")
@click.pass_context
def list_days(ctx):
    """List the days that have saved data."""
    dates = DayService(ctx.obj["store"]).list_saved_dates()
    if not dates:
        click.echo("No saved days.")
        return

    click.echo(f"\nSaved days ({len(dates)}):")
    for day in dates:
        click.echo(f"  {to_date_string(day)}")


@click.command("export")
@click.option("--date", "date_str", help="Day to export (default today)")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write the report to a file instead of stdout")
@click.pass_context
def export_command(ctx, date_str: str | None, output: str | None):
    """Export a day as Markdown with Gantt charts."""
    store = ctx.obj["store"]
    day = resolve_cli_date(ctx, date_str)
    date_label = to_date_string(day)
    slots = DayService(store).load_day(day)
    report = export_day(slots, date_label, SubActivityService(store).list_sub_activities())

    if output:
        Path(output).write_text(report, encoding="utf-8")
        click.echo(f"Exported {date_label} to {output}")
    else:
        click.echo(report, nl=False)


def register_commands(cli):
    """Register day commands with main CLI."""
    cli.add_command(show_day)
    cli.add_command(paint_day)
    cli.add_command(note_slot)
    cli.add_command(export_command)
    cli.add_command(list_days)
