"""User profile commands."""

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.domain.errors import DomainError
from finsight.domain.user import UserService


@click.group()
def user_group():
    """Manage user profiles."""
    pass


@user_group.command("add")
@click.argument("user_id")
@click.option("--name", required=True, help="Display name")
@click.option("--email", help="Email address")
@click.pass_context
def add_user(ctx, user_id: str, name: str, email: str | None):
    """Create a user profile."""
    service = UserService(ctx.obj["db"])
    try:
        service.create_user(user_id, name, email=email)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{user_id}' ({name})")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
