"""Full report command."""

import click
from finrecon.cli.date_filters import date_range_options, pop_period_flags, resolve_cli_date_range
from finrecon.cli.error_handling import handle_domain_error
from finrecon.cli.formatting import (
    echo_breakdown,
    echo_comparison,
    echo_summary,
    echo_time_series,
)
from finrecon.domain.entities import BucketSize, FilterType, NoDataCondition
from finrecon.domain.errors import DomainError
from finrecon.domain.reporting import ReportService


@click.command("report")
@click.option("--category", help="Only report on this category ('All' for every category)")
@click.option(
    "--type",
    "filter_type",
    type=click.Choice([t.value for t in FilterType]),
    default=FilterType.BOTH.value,
    show_default=True,
    help="Report on expenses, income or both",
)
@click.option(
    "--bucket",
    type=click.Choice([b.value for b in BucketSize]),
    default=BucketSize.WEEK.value,
    show_default=True,
    help="Time bucket size for the trend section",
)
@date_range_options
@click.pass_context
def show_report(
    ctx,
    category: str | None,
    filter_type: str,
    bucket: str,
    start_date: str | None,
    end_date: str | None,
    **kwargs,
) -> None:
    """Show the full budget reconciliation report.

    Includes the category breakdown, budget comparisons, trend and summary,
    followed by any data problems found in the transactions.

    Examples:
        finrecon report --this-month
        finrecon report --type expense --last-quarter --bucket month
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=pop_period_flags(kwargs),
    )

    report_service = ReportService(ctx.obj["db"])
    try:
        report = report_service.build_report(
            start_date=start, end_date=end, category=category, type=filter_type, bucket=bucket
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    if isinstance(report, NoDataCondition):
        click.echo(report.reason)
        return

    window = report.filter
    click.echo(
        f"Report: {window.start_date or 'beginning'} to {window.end_date or 'today'} "
        f"({window.type.value})"
    )
    if len(report.type_breakdowns) > 1:
        for budget_type, shares in report.type_breakdowns.items():
            echo_breakdown(shares, f"{budget_type.value.title()} Breakdown")
    else:
        echo_breakdown(report.category_breakdown)
    for budget_type, result in report.comparisons.items():
        echo_comparison(result, budget_type)
    if len(report.type_time_series) > 1:
        for budget_type, points in report.type_time_series.items():
            echo_time_series(points, report.bucket.value, f"{budget_type.value.title()} trend")
    else:
        echo_time_series(report.time_series, report.bucket.value)
    echo_summary(report.summary)

    if report.warnings:
        click.echo(f"\nData warnings ({len(report.warnings)}):", err=True)
        for warning in report.warnings:
            click.echo(f"  [{warning.kind.value}] {warning.message}", err=True)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(show_report)
