"""Add transaction command."""

import click

from finsight.cli.error_handling import handle_domain_error, parse_or_exit
from finsight.domain.errors import DomainError
from finsight.domain.transaction import TransactionService
from finsight.utils.amount_parser import parse_amount
from finsight.utils.date_parser import parse_date


@click.command("add")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice(["income", "expense"], case_sensitive=False),
    required=True,
    help="Transaction type",
)
@click.option("--amount", required=True, help="Transaction amount (e.g., 45.50)")
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", help="Transaction description")
@click.option("--category", help="Existing category name")
@click.pass_context
def add_transaction(
    ctx,
    user_id: str,
    transaction_type: str,
    amount: str,
    date_str: str,
    description: str | None,
    category: str | None,
):
    """Add a transaction manually.

    Examples:
        finsight add --user u1 --type expense --amount 45.50 --description "Lunch"
        finsight add --user u1 --type income --amount 5000 --category Salary
    """
    service = TransactionService(ctx.obj["db"])

    txn_date = parse_or_exit(ctx, parse_date, date_str, "date format")
    txn_amount = parse_or_exit(ctx, parse_amount, amount, "amount format")

    try:
        transaction_id = service.create_transaction(
            user_id=user_id,
            transaction_type=transaction_type,
            amount=txn_amount,
            date=txn_date,
            description=description,
            category_name=category,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Type: {transaction_type.lower()}")
    click.echo(f"  Date: {txn_date}")
    click.echo(f"  Amount: {txn_amount:,.2f}")
    if description:
        click.echo(f"  Description: {description}")
    if category:
        click.echo(f"  Category: {category}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
