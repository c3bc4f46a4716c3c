"""Category management commands."""

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.domain.category import CATEGORY_TYPES, CategoryService
from finsight.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        type_str = f" [{cat.type}]" if cat.type else ""
        click.echo(f"{cat.name}{type_str} (ID: {cat.id})")


@category_group.command("add")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice(CATEGORY_TYPES, case_sensitive=False),
    help="Category type",
)
@click.pass_context
def add_category(ctx, name: str, category_type: str | None):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(
            name, category_type=category_type.lower() if category_type else None
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
