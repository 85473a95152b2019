"""Category listing command."""

import click
from timeblocker.domain.categories import CATEGORIES
from timeblocker.domain.sub_activities import SubActivityService


@click.command("categories")
@click.pass_context
def list_categories(ctx):
    """List categories and their sub-activities."""
    sub_service = SubActivityService(ctx.obj["store"])

    click.echo("\nCategories:")
    for category in CATEGORIES:
        click.echo(f"{category.name} (ID: {category.id})")
        for sub in sub_service.list_sub_activities(parent_id=category.id):
            click.echo(f"  {sub.name} (ID: {sub.id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(list_categories)
