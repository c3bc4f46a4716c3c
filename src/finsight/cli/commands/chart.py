"""Cumulative chart series command."""

import click

from finsight.cli.commands.summary import renderer_from_context
from finsight.cli.error_handling import handle_domain_error
from finsight.domain.dashboard import DashboardService
from finsight.domain.errors import DomainError


@click.command("chart")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--days", type=int, help="Days to look back (default: FINSIGHT_CHART_DAYS or 90)")
@click.pass_context
def chart(ctx, user_id: str, days: int | None):
    """Show running income, expenses and net worth per day."""
    service = DashboardService(ctx.obj["db"])
    money = renderer_from_context(ctx).format_amount
    if days is None:
        days = ctx.obj["settings"].chart_days

    try:
        series = service.get_chart_series(user_id, days=days)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not series:
        click.echo("No transactions found.")
        return

    click.echo(f"{'Date':<12} {'Income':>20} {'Expenses':>20} {'Net Worth':>20}")
    click.echo("-" * 75)
    for entry in series:
        click.echo(
            f"{entry.date.isoformat():<12} {money(entry.income):>20} "
            f"{money(entry.expenses):>20} {money(entry.net_worth):>20}"
        )


def register_commands(cli):
    """Register chart command with main CLI."""
    cli.add_command(chart)
