"""Trend command."""

import click
from finrecon.cli.date_filters import date_range_options, pop_period_flags, resolve_cli_date_range
from finrecon.cli.error_handling import handle_domain_error
from finrecon.cli.formatting import echo_time_series
from finrecon.domain.entities import BucketSize, FilterType
from finrecon.domain.errors import DomainError
from finrecon.domain.reporting import ReportService


@click.command("trend")
@click.option("--category", help="Only include this category ('All' for every category)")
@click.option(
    "--type",
    "filter_type",
    type=click.Choice([t.value for t in FilterType]),
    default=FilterType.EXPENSE.value,
    show_default=True,
    help="Trend expenses, income or both",
)
@click.option(
    "--bucket",
    type=click.Choice([b.value for b in BucketSize]),
    default=BucketSize.WEEK.value,
    show_default=True,
    help="Time bucket size",
)
@date_range_options
@click.pass_context
def show_trend(
    ctx,
    category: str | None,
    filter_type: str,
    bucket: str,
    start_date: str | None,
    end_date: str | None,
    **kwargs,
) -> None:
    """Show activity totals over time.

    Examples:
        finrecon trend --this-year --bucket month
        finrecon trend --category Food --last-month --bucket day
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    report_service = ReportService(ctx.obj["db"])
    try:
        points = report_service.time_series(
            start_date=start, end_date=end, category=category, type=filter_type, bucket=bucket
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    echo_time_series(points, bucket)


def register_commands(cli):
    """Register trend command with main CLI."""
    cli.add_command(show_trend)
