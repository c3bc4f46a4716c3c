"""Insight commands."""

import json

import click

from finsight.cli.error_handling import handle_domain_error
from finsight.domain.entities import Insight, InsightType
from finsight.domain.errors import DomainError
from finsight.domain.insight_service import InsightService


def print_insight(insight: Insight) -> None:
    click.echo(f"[{insight.priority.value.upper()}] {insight.title}")
    click.echo(f"  {insight.description}")
    if insight.action:
        click.echo(f"  Action: {insight.action}")


@click.command("insights")
@click.option("--user", "user_id", help="User ID (omit for general answers)")
@click.option(
    "--type",
    "insight_type",
    type=click.Choice([t.value for t in InsightType]),
    help="Insight generator to run (default: spending-analysis)",
)
@click.option("--all", "run_all", is_flag=True, help="Run every insight generator")
@click.option("--query", help="Free-text question, answered when no user is given")
@click.option("--json", "as_json", is_flag=True, help="Print insights as JSON")
@click.pass_context
def insights(ctx, user_id, insight_type, run_all: bool, query, as_json: bool):
    """Show financial insights."""
    if run_all and insight_type:
        click.echo("Error: --all cannot be combined with --type.", err=True)
        ctx.exit(1)

    service = InsightService(ctx.obj["db"])
    try:
        if run_all:
            results = service.get_all_insights(user_id)
        else:
            results = service.get_insights(user_id, insight_type=insight_type, query=query)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(json.dumps([insight.to_dict() for insight in results], indent=2))
        return

    for i, insight in enumerate(results):
        if i:
            click.echo()
        print_insight(insight)


def register_commands(cli):
    """Register insights command with main CLI."""
    cli.add_command(insights)
