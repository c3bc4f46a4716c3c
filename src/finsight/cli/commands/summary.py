"""Dashboard summary command."""

import click

from finsight.cli.error_handling import handle_domain_error, parse_or_exit
from finsight.domain.dashboard import DashboardService
from finsight.domain.errors import DomainError
from finsight.reports import ReportRenderer
from finsight.utils.date_parser import parse_date


def renderer_from_context(ctx) -> ReportRenderer:
    """Build a renderer using the configured currency format."""
    settings = ctx.obj["settings"]
    return ReportRenderer(
        currency_prefix=settings.currency_prefix,
        thousands_separator=settings.thousands_separator,
    )


@click.command("summary")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--monthly", is_flag=True, help="Show the current month with its change")
@click.option("--as-of", "as_of", help="Reference date for --monthly (default: today)")
@click.pass_context
def summary(ctx, user_id: str, monthly: bool, as_of: str | None):
    """Show income, expenses, net worth and holdings."""
    service = DashboardService(ctx.obj["db"])
    money = renderer_from_context(ctx).format_amount

    today = parse_or_exit(ctx, parse_date, as_of, "date") if as_of else None
    try:
        if monthly:
            result = service.get_monthly_summary(user_id, today=today)
        else:
            result = service.get_summary(user_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    title = "Monthly Summary" if monthly else "Summary"
    click.echo(f"\n{title}:")
    click.echo("-" * 50)
    rows = [
        ("Total Income", money(result.total_income)),
        ("Total Expenses", money(result.total_expenses)),
        ("Profit/Loss", money(result.profit_loss)),
        ("Total Assets", money(result.total_assets)),
        ("Total Investments", money(result.total_investments)),
        ("Net Worth", money(result.net_worth)),
    ]
    if result.monthly_change is not None:
        rows.append(("Monthly Change", f"{result.monthly_change:+.2f}%"))
    for label, value in rows:
        click.echo(f"{label:<30} {value:>19}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
