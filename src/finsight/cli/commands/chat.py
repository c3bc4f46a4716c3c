"""Conversational transaction capture command."""

import random
from datetime import date

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.domain.chat import ChatService
from finsight.domain.entities import ParsedTransactionDraft
from finsight.domain.errors import DomainError
from finsight.domain.parser import TextTransactionParser
from finsight.domain.transaction import TransactionService


@click.command("chat")
@click.argument("message")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--save", is_flag=True, help="Record the parsed transaction")
@click.option("--seed", type=int, help="Seed for the conversational reply choice")
@click.pass_context
def chat(ctx, message: str, user_id: str, save: bool, seed: int | None):
    """Describe a transaction in plain language.

    Examples:
        finsight chat "spent 45.50 on lunch at cafe" --user u1
        finsight chat "received 5000 salary" --user u1 --save
    """
    db = ctx.obj["db"]
    rng = random.Random(seed) if seed is not None else None
    service = ChatService(db, parser=TextTransactionParser(rng=rng))

    try:
        result = service.process_message(user_id, message)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(result.message)
    if not isinstance(result, ParsedTransactionDraft):
        return

    click.echo(f"  Type: {result.type.value}")
    click.echo(f"  Amount: {result.amount:,.2f}")
    click.echo(f"  Description: {result.description}")
    click.echo(f"  Category: {result.category}")

    if save:
        try:
            transaction_id = TransactionService(db).save_draft(result, on_date=date.today())
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Saved transaction {transaction_id}")


def register_commands(cli):
    """Register chat command with main CLI."""
    cli.add_command(chat)
