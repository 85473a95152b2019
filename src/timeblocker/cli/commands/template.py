"""Template commands."""

import click
from timeblocker.cli.activity_resolution import resolve_activity_or_exit
from timeblocker.cli.commands.day import parse_range_or_exit, render_hour_rows
from timeblocker.cli.error_handling import handle_domain_error
from timeblocker.domain.days import DayService
from timeblocker.domain.entities import Track
from timeblocker.domain.errors import DomainError
from timeblocker.domain.sub_activities import SubActivityService
from timeblocker.domain.time_grid import assign_slots


@click.group()
def template_group():
    """Manage the default day template.

    New days without saved data start from the template, with its plan
    copied onto both the plan and the actual track.
    """
    pass


@template_group.command("show")
@click.pass_context
def show_template(ctx):
    """Show the template plan as an hour grid."""
    store = ctx.obj["store"]
    day_service = DayService(store)
    if day_service.get_stored_template() is None:
        click.echo("No template saved.")
        return

    click.echo("\nTemplate (plan)")
    for row in render_hour_rows(
        day_service.load_template(), Track.PLAN, SubActivityService(store).as_mapping()
    ):
        click.echo(row)


@template_group.command("paint")
@click.argument("start")
@click.argument("end")
@click.argument("category")
@click.option("--sub", help="Sub-activity name or ID under the category")
@click.pass_context
def paint_template(ctx, start: str, end: str, category: str, sub: str | None):
    """Paint the template plan from START up to END with CATEGORY ("-" erases)."""
    store = ctx.obj["store"]
    day_service = DayService(store)
    start_index, end_index = parse_range_or_exit(ctx, start, end)
    category_id, sub_id = resolve_activity_or_exit(ctx, SubActivityService(store), category, sub)

    try:
        slots = assign_slots(
            day_service.load_template(), start_index, end_index, Track.PLAN, category_id, sub_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    day_service.save_template(slots)
    label = category if category_id is not None else "(erased)"
    click.echo(f"Painted template {start}-{end} {label}")


@template_group.command("clear")
@click.pass_context
def clear_template(ctx):
    """Delete the template."""
    if DayService(ctx.obj["store"]).clear_template():
        click.echo("Template cleared.")
    else:
        click.echo("No template saved.")


def register_commands(cli):
    """Register template commands with main CLI."""
    cli.add_command(template_group, name="template")
