"""CLI helpers for resolving category and sub-activity arguments."""

from __future__ import annotations

import click
from timeblocker.domain.categories import find_category
from timeblocker.domain.errors import category_not_found
from timeblocker.domain.sub_activities import SubActivityService

ERASE_VALUES = {"-", "none", "eraser"}


def resolve_activity_or_exit(
    ctx: click.Context,
    sub_service: SubActivityService,
    category: str,
    sub: str | None,
) -> tuple[str | None, str | None]:
    """Resolve a category id/name and optional sub-activity id/name.

    Returns (None, None) for the eraser values; exits with a CLI error when
    either argument does not resolve.
    """
    if category.strip().lower() in ERASE_VALUES:
        if sub:
            click.echo("Error: --sub cannot be used when erasing", err=True)
            ctx.exit(1)
        return None, None

    category_obj = find_category(category)
    if category_obj is None:
        click.echo(f"Error: {category_not_found(category)}", err=True)
        ctx.exit(1)

    if not sub:
        return category_obj.id, None

    sub_obj = sub_service.find_sub_activity(category_obj.id, sub)
    if sub_obj is None:
        click.echo(
            f"Error: Sub-activity '{sub}' not found under '{category_obj.name}'",
            err=True,
        )
        ctx.exit(1)
    return category_obj.id, sub_obj.id
