"""PDF report commands."""

from pathlib import Path

import click

from finsight.cli.commands.summary import renderer_from_context
from finsight.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from finsight.cli.error_handling import handle_domain_error, parse_or_exit
from finsight.domain.errors import DomainError
from finsight.domain.reporting import RenderedReport, ReportService
from finsight.utils.date_parser import parse_date


def write_report(ctx, report: RenderedReport, output_dir: str) -> Path:
    """Write a rendered report into output_dir and announce it."""
    path = Path(output_dir) / report.filename
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(report.content, bytes):
            path.write_bytes(report.content)
        else:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(report.content)
    except OSError as e:
        click.echo(f"Error: Could not write {path}: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Wrote {path}")
    return path


def _report_service(ctx) -> ReportService:
    return ReportService(ctx.obj["db"], renderer=renderer_from_context(ctx))


@click.group()
def report_group():
    """Generate PDF reports."""
    pass


def _category_report_command(name: str, method_name: str, help_text: str):
    @report_group.command(name, help=help_text)
    @click.option("--user", "user_id", required=True, help="User ID")
    @click.option("--start-date", help="Start date (default: first day of this month)")
    @click.option("--end-date", help="End date (default: today)")
    @period_options
    @click.option("--output-dir", default=".", show_default=True, type=click.Path(file_okay=False))
    @click.pass_context
    def command(ctx, user_id, start_date, end_date, output_dir, **kwargs):
        start, end = resolve_cli_date_range(
            ctx,
            start_date=start_date,
            end_date=end_date,
            period_flags=collect_period_flags(kwargs),
        )
        service = _report_service(ctx)
        try:
            rendered = getattr(service, method_name)(user_id, start_date=start, end_date=end)
        except DomainError as e:
            handle_domain_error(ctx, e)
        write_report(ctx, rendered, output_dir)

    return command


income_statement = _category_report_command(
    "income-statement", "income_statement", "Income grouped by category."
)
expense_report = _category_report_command(
    "expense-report", "expense_report", "Expenses grouped by category."
)


@report_group.command("balance-sheet")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--as-of", "as_of", help="Balance sheet date (default: today)")
@click.option("--output-dir", default=".", show_default=True, type=click.Path(file_okay=False))
@click.pass_context
def balance_sheet(ctx, user_id: str, as_of: str | None, output_dir: str):
    """Assets, liabilities and equity as of a date."""
    as_of_date = parse_or_exit(ctx, parse_date, as_of, "date") if as_of else None
    service = _report_service(ctx)
    try:
        rendered = service.balance_sheet(user_id, as_of=as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)
    write_report(ctx, rendered, output_dir)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
