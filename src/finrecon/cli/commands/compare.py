"""Budget versus actual comparison command."""

import click
from finrecon.cli.date_filters import date_range_options, pop_period_flags, resolve_cli_date_range
from finrecon.cli.error_handling import handle_domain_error
from finrecon.cli.formatting import echo_comparison
from finrecon.domain.entities import FilterType
from finrecon.domain.errors import DomainError
from finrecon.domain.reporting import ReportService


@click.command("compare")
@click.option("--category", help="Only compare this category ('All' for every category)")
@click.option(
    "--type",
    "filter_type",
    type=click.Choice([t.value for t in FilterType]),
    default=FilterType.BOTH.value,
    show_default=True,
    help="Compare expense budgets, income goals or both",
)
@date_range_options
@click.pass_context
def compare_budgets(
    ctx,
    category: str | None,
    filter_type: str,
    start_date: str | None,
    end_date: str | None,
    **kwargs,
) -> None:
    """Compare budgeted amounts with actual activity.

    Examples:
        finrecon compare --this-month
        finrecon compare --type expense --start-date 2024-01-01 --end-date 2024-01-31
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    report_service = ReportService(ctx.obj["db"])
    try:
        comparisons = report_service.compare(
            start_date=start, end_date=end, category=category, type=filter_type
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    for budget_type, result in comparisons.items():
        echo_comparison(result, budget_type)


def register_commands(cli):
    """Register compare command with main CLI."""
    cli.add_command(compare_budgets)
