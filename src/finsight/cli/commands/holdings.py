"""Asset and investment commands."""

import click

from finsight.cli.error_handling import handle_domain_error, parse_or_exit
from finsight.domain.errors import DomainError
from finsight.domain.holdings import HoldingService
from finsight.utils.amount_parser import parse_amount
from finsight.utils.date_parser import parse_date


def _optional_amount(ctx, value: str | None, label: str):
    if value is None:
        return None
    return parse_or_exit(ctx, parse_amount, value, label)


@click.group()
def asset_group():
    """Manage assets."""
    pass


@asset_group.command("add")
@click.argument("name")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--price", required=True, help="Purchase price")
@click.option("--value", "current_value", help="Current value (defaults to purchase price)")
@click.option("--date", "date_str", default="today", show_default=True, help="Purchase date")
@click.option("--description", help="Description")
@click.pass_context
def add_asset(ctx, name, user_id, price, current_value, date_str, description):
    """Record an asset."""
    service = HoldingService(ctx.obj["db"])
    purchase_date = parse_or_exit(ctx, parse_date, date_str, "date format")
    purchase_price = parse_or_exit(ctx, parse_amount, price, "price")
    value = _optional_amount(ctx, current_value, "value")

    try:
        asset_id = service.create_asset(
            user_id=user_id,
            name=name,
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            current_value=value,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created asset '{name}' (ID: {asset_id})")


@click.group()
def investment_group():
    """Manage investments."""
    pass


@investment_group.command("add")
@click.argument("name")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--type", "investment_type", required=True, help="Investment type (e.g., stock)")
@click.option("--price", required=True, help="Purchase price")
@click.option(
    "--value", "current_value", help="Current value (counted as zero in totals when omitted)"
)
@click.option("--quantity", help="Units held")
@click.option("--date", "date_str", default="today", show_default=True, help="Purchase date")
@click.option("--description", help="Description")
@click.pass_context
def add_investment(
    ctx, name, user_id, investment_type, price, current_value, quantity, date_str, description
):
    """Record an investment."""
    service = HoldingService(ctx.obj["db"])
    purchase_date = parse_or_exit(ctx, parse_date, date_str, "date format")
    purchase_price = parse_or_exit(ctx, parse_amount, price, "price")
    value = _optional_amount(ctx, current_value, "value")
    units = _optional_amount(ctx, quantity, "quantity")

    try:
        investment_id = service.create_investment(
            user_id=user_id,
            name=name,
            investment_type=investment_type,
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            current_value=value,
            quantity=units,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created investment '{name}' (ID: {investment_id})")


def register_commands(cli):
    """Register asset and investment commands with main CLI."""
    cli.add_command(asset_group, name="asset")
    cli.add_command(investment_group, name="investment")
