"""CSV export command."""

import click

from finsight.cli.commands.report import write_report
from finsight.cli.date_filters import collect_period_flags, period_options, resolve_cli_date_range
from finsight.cli.error_handling import handle_domain_error
from finsight.domain.entities import ReportRequest
from finsight.domain.errors import DomainError
from finsight.domain.reporting import ReportService


@click.command("export")
@click.option("--user", "user_id", required=True, help="User ID")
@click.option("--format", "export_format", default="csv", show_default=True, help="Export format")
@click.option("--start-date", help="Start date (default: first day of this month)")
@click.option("--end-date", help="End date (default: today)")
@period_options
@click.option("--output-dir", default=".", show_default=True, type=click.Path(file_okay=False))
@click.pass_context
def export(ctx, user_id, export_format, start_date, end_date, output_dir, **kwargs):
    """Export transactions as a semicolon-separated CSV file."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=collect_period_flags(kwargs),
    )
    request = ReportRequest(from_date=start, to_date=end, format=export_format)
    try:
        rendered = ReportService(ctx.obj["db"]).export(user_id, request)
    except DomainError as e:
        handle_domain_error(ctx, e)
    write_report(ctx, rendered, output_dir)


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export)
