"""Plain-text rendering of core results for the CLI."""

from decimal import Decimal
from typing import Sequence, Union

import click

from finrecon.domain.entities import (
    BudgetType,
    CategoryShare,
    ComparisonResult,
    NoDataCondition,
    PageWindow,
    ReportSummary,
    TimeSeriesPoint,
    Transaction,
)

WIDTH = 80

STATUS_LABELS = {
    "within-budget": "Within budget",
    "over-budget": "Over budget",
    "goal-met": "Goal met",
    "goal-shortfall": "Goal shortfall",
}


def format_amount(amount: Decimal) -> str:
    """Format an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def echo_comparison(result: Union[ComparisonResult, NoDataCondition], budget_type: BudgetType) -> None:
    """Print one comparison table, or the no-data notice."""
    heading = "Expense Budgets" if budget_type == BudgetType.EXPENSE else "Income Goals"
    click.echo(f"\n{heading}:")
    click.echo("-" * WIDTH)
    if isinstance(result, NoDataCondition):
        click.echo(result.reason)
        return

    click.echo(f"{'Category':<28} {'Budgeted':>12} {'Actual':>12} {'Difference':>12}  Status")
    click.echo("-" * WIDTH)
    for row in (*result.rows, None, result.totals):
        if row is None:
            click.echo("-" * WIDTH)
            continue
        click.echo(
            f"{row.category[:28]:<28} {format_amount(row.budgeted_amount):>12} "
            f"{format_amount(row.actual_amount):>12} {format_amount(row.difference):>12}  "
            f"{STATUS_LABELS[row.status.value]}"
        )


def echo_breakdown(shares: Sequence[CategoryShare], title: str = "Category Breakdown") -> None:
    """Print category totals with percentage of total, largest first."""
    click.echo(f"\n{title}:")
    click.echo("-" * WIDTH)
    if not shares:
        click.echo("No activity in range.")
        return
    for share in sorted(shares, key=lambda s: (-s.amount, s.category)):
        click.echo(
            f"{share.category[:50]:<50} {format_amount(share.amount):>16} {share.percentage:>9.2f}%"
        )


def echo_time_series(
    points: Sequence[TimeSeriesPoint], bucket_name: str, label: str = "Trend"
) -> None:
    """Print a trend series, one bucket per line."""
    click.echo(f"\n{label} by {bucket_name}:")
    click.echo("-" * WIDTH)
    if not points:
        click.echo("No activity in range.")
        return
    for point in points:
        click.echo(f"{point.bucket_start.isoformat():<12} {format_amount(point.amount):>16}")


def echo_summary(summary: ReportSummary) -> None:
    """Print the numeric report summary."""
    click.echo("\nSummary:")
    click.echo("-" * WIDTH)
    click.echo(f"{'Grand total':<30} {format_amount(summary.grand_total):>16}")
    click.echo(f"{'Transactions':<30} {summary.transaction_count:>16}")
    click.echo(f"{'Average transaction':<30} {format_amount(summary.average_transaction_amount):>16}")
    click.echo(f"{'Top category':<30} {summary.top_category or '-':>16}")
    for outlier in summary.outliers:
        click.echo(
            f"Unusually large: {format_amount(outlier.amount)} in {outlier.category} "
            f"on {outlier.date.isoformat()}"
        )


def echo_transactions(transactions: Sequence[Transaction], window: PageWindow) -> None:
    """Print one page of transactions and the page window."""
    click.echo(
        f"\nPage {window.current_page} of {window.total_pages} "
        f"({window.total_count} transaction{'s' if window.total_count != 1 else ''}):"
    )
    click.echo("-" * WIDTH)
    click.echo(f"{'ID':<6} {'Date':<12} {'Type':<7} {'Amount':>12}  {'Category':<20} {'Source':<7}")
    click.echo("-" * WIDTH)
    for txn in transactions:
        category = txn.category or "Uncategorized"
        if txn.sub_categories:
            category = ", ".join(sub.category or "?" for sub in txn.sub_categories)
        click.echo(
            f"{txn.id:<6} {txn.date.isoformat():<12} {txn.type.value:<7} "
            f"{format_amount(txn.amount):>12}  {category[:20]:<20} {txn.source.value:<7}"
        )
