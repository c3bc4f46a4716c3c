"""CLI helpers for date range resolution."""

from datetime import date

import click

from finsight.utils.date_parser import get_date_range, parse_date

PERIOD_NAMES = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def period_options(command):
    """Attach the --this-month ... --last-week flags to a command."""
    for period in reversed(PERIOD_NAMES):
        label = period.replace("-", " ")
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Filter to {label}",
        )(command)
    return command


def collect_period_flags(kwargs: dict) -> dict[str, bool]:
    """Pop period flags out of a command's keyword arguments."""
    return {period: kwargs.pop(period.replace("-", "_"), False) for period in PERIOD_NAMES}


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    today: date | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    Missing ends stay None so services can apply their own defaults.
    """
    today = today or date.today()
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --this-week, --last-month, --last-year, --last-week) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                start, end = get_date_range(period, today=today)
                break
    else:
        if start_date:
            try:
                start = parse_date(start_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid start date: {e}", err=True)
                ctx.exit(1)

        if end_date:
            try:
                end = parse_date(end_date, today=today)
            except ValueError as e:
                click.echo(f"Error: Invalid end date: {e}", err=True)
                ctx.exit(1)

    return start, end
