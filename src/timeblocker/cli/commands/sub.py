"""Sub-activity management commands."""

import click
from timeblocker.cli.error_handling import handle_domain_error
from timeblocker.domain.categories import find_category, resolve_category
from timeblocker.domain.errors import DomainError, category_not_found
from timeblocker.domain.sub_activities import SubActivityService


@click.group()
def sub_group():
    """Manage sub-activities."""
    pass


@sub_group.command("list")
@click.option("--category", help="Only list sub-activities of this category (ID or name)")
@click.pass_context
def list_sub_activities(ctx, category: str | None):
    """List sub-activities."""
    service = SubActivityService(ctx.obj["store"])

    parent_id = None
    if category:
        category_obj = find_category(category)
        if category_obj is None:
            click.echo(f"Error: {category_not_found(category)}", err=True)
            ctx.exit(1)
        parent_id = category_obj.id

    sub_activities = service.list_sub_activities(parent_id=parent_id)
    if not sub_activities:
        click.echo("No sub-activities found.")
        return

    for sub in sub_activities:
        parent_name = resolve_category(sub.parent_id).name
        click.echo(f"{parent_name} > {sub.name} (ID: {sub.id})")


@sub_group.command("create")
@click.argument("category")
@click.argument("name")
@click.pass_context
def create_sub_activity(ctx, category: str, name: str):
    """Create sub-activity NAME under CATEGORY (ID or name)."""
    service = SubActivityService(ctx.obj["store"])
    category_obj = find_category(category)
    parent_id = category_obj.id if category_obj is not None else category

    try:
        sub = service.create_sub_activity(parent_id=parent_id, name=name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created sub-activity '{sub.name}' under '{resolve_category(sub.parent_id).name}' (ID: {sub.id})")


@sub_group.command("delete")
@click.argument("sub_activity_id")
@click.pass_context
def delete_sub_activity(ctx, sub_activity_id: str):
    """Delete a sub-activity by ID.

    Slots painted with it keep their category.
    """
    service = SubActivityService(ctx.obj["store"])
    try:
        sub = service.delete_sub_activity(sub_activity_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted sub-activity '{sub.name}'")


def register_commands(cli):
    """Register sub-activity commands with main CLI."""
    cli.add_command(sub_group, name="sub")
