"""Report assembly: breakdown, comparisons, trend and numeric summary."""

import logging
import statistics
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Mapping, Sequence, Union

from finrecon.domain.aggregator import CategoryAggregator
from finrecon.domain.comparator import budget_totals_by_category, compare
from finrecon.domain.entities import (
    AtomicEntry,
    Budget,
    BucketSize,
    BudgetType,
    CategoryShare,
    ComparisonResult,
    DataIntegrityWarning,
    FilterType,
    NoDataCondition,
    Outlier,
    Report,
    ReportSummary,
    TimeSeriesPoint,
    Transaction,
)
from finrecon.domain.filters import ReportFilter
from finrecon.domain.normalizer import normalize_transactions
from finrecon.domain.timeseries import parse_bucket

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

TOP_CATEGORY_COUNT = 3
# Transactions further than this many standard deviations above the mean are outliers.
OUTLIER_DEVIATIONS = 2


def category_breakdown(
    totals: Mapping[str, Decimal], grand_total: Decimal
) -> tuple[CategoryShare, ...]:
    """Attach percentage-of-total to each category total.

    Percentages are all zero when the grand total is zero.
    """
    return tuple(
        CategoryShare(
            category=category,
            amount=amount,
            percentage=(amount / grand_total * HUNDRED) if grand_total else ZERO,
        )
        for category, amount in totals.items()
    )


def _transaction_totals(entries: Sequence[AtomicEntry]) -> list[Outlier]:
    """Re-assemble filtered entries into one amount per parent transaction."""
    grouped: dict[object, Outlier] = {}
    for index, entry in enumerate(entries):
        key = entry.transaction_id if entry.transaction_id is not None else ("entry", index)
        current = grouped.get(key)
        if current is None:
            grouped[key] = Outlier(
                transaction_id=entry.transaction_id,
                category=entry.category,
                amount=entry.amount,
                date=entry.date,
            )
        else:
            grouped[key] = replace(current, amount=current.amount + entry.amount)
    return list(grouped.values())


def find_outliers(transactions: Sequence[Outlier]) -> tuple[Outlier, ...]:
    """Return transactions more than two standard deviations above the mean."""
    if len(transactions) < 2:
        return ()
    amounts = [txn.amount for txn in transactions]
    threshold = statistics.mean(amounts) + OUTLIER_DEVIATIONS * statistics.pstdev(amounts)
    return tuple(txn for txn in transactions if txn.amount > threshold)


def summarize(
    entries: Sequence[AtomicEntry], breakdown: Sequence[CategoryShare], grand_total: Decimal
) -> ReportSummary:
    """Compute the numeric summary consumed by narrative generators."""
    transactions = _transaction_totals(entries)
    count = len(transactions)
    ranked = sorted(breakdown, key=lambda share: share.amount, reverse=True)
    return ReportSummary(
        grand_total=grand_total,
        transaction_count=count,
        average_transaction_amount=grand_total / count if count else ZERO,
        top_category=ranked[0].category if ranked else None,
        top_categories=tuple(ranked[:TOP_CATEGORY_COUNT]),
        outliers=find_outliers(transactions),
    )


def assemble_report(
    report_filter: ReportFilter,
    aggregator: CategoryAggregator,
    comparisons: Mapping[BudgetType, Union[ComparisonResult, NoDataCondition]],
    time_series: Sequence[TimeSeriesPoint],
    warnings: Sequence[DataIntegrityWarning] = (),
    bucket: BucketSize = BucketSize.WEEK,
) -> Report:
    """Merge aggregation, comparison and trend output into one report.

    Alongside the combined figures, each selected budget type gets its own
    breakdown and trend so that debits and credits are never mixed in a
    percentage.
    """
    grand_total = aggregator.total()
    breakdown = category_breakdown(aggregator.by_category(), grand_total)
    type_breakdowns = {}
    type_time_series = {}
    for budget_type in report_filter.type.budget_types:
        typed_filter = replace(report_filter, type=FilterType(budget_type.value))
        typed = CategoryAggregator(aggregator.entries(), typed_filter)
        type_breakdowns[budget_type] = category_breakdown(typed.by_category(), typed.total())
        type_time_series[budget_type] = typed.by_bucket(bucket)
    return Report(
        filter=report_filter,
        category_breakdown=breakdown,
        comparisons=dict(comparisons),
        time_series=tuple(time_series),
        summary=summarize(aggregator.entries(), breakdown, grand_total),
        bucket=bucket,
        warnings=tuple(warnings),
        type_breakdowns=type_breakdowns,
        type_time_series=type_time_series,
    )


def compare_entries(
    entries: Sequence[AtomicEntry],
    budgets: Sequence[Budget],
    report_filter: ReportFilter,
) -> dict[BudgetType, Union[ComparisonResult, NoDataCondition]]:
    """Run the budget comparison for every budget type the filter selects."""
    comparisons: dict[BudgetType, Union[ComparisonResult, NoDataCondition]] = {}
    for budget_type in report_filter.type.budget_types:
        typed_filter = replace(report_filter, type=FilterType(budget_type.value))
        actual = CategoryAggregator(entries, typed_filter).by_category()
        budgeted = budget_totals_by_category(budgets, budget_type, typed_filter)
        comparisons[budget_type] = compare(budgeted, actual, budget_type)
    return comparisons


def build_report(
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    report_filter: ReportFilter,
    bucket: Union[str, BucketSize] = BucketSize.WEEK,
) -> Union[Report, NoDataCondition]:
    """Run the full pipeline over fully resolved transactions and budgets.

    Args:
        transactions: Transactions fetched for the request
        budgets: All budgets; filtering by type, category and period happens here
        report_filter: Validated request filter
        bucket: Time bucket for the trend series

    Returns:
        Report, or NoDataCondition when no requested budget type has any
        budgets or matching activity
    """
    bucket = parse_bucket(bucket)
    budgets = list(budgets)
    normalized = normalize_transactions(transactions)

    comparisons = compare_entries(normalized.entries, budgets, report_filter)
    if all(isinstance(result, NoDataCondition) for result in comparisons.values()):
        types = report_filter.type.budget_types
        return NoDataCondition(
            budget_type=types[0] if len(types) == 1 else None,
            reason="No budgets or matching transactions for the requested window",
        )

    aggregator = CategoryAggregator(normalized.entries, report_filter)
    report = assemble_report(
        report_filter,
        aggregator,
        comparisons,
        aggregator.by_bucket(bucket),
        warnings=normalized.warnings,
        bucket=bucket,
    )
    logger.info(
        "Assembled report: %d categories, %d buckets, %d warnings",
        len(report.category_breakdown),
        len(report.time_series),
        len(report.warnings),
    )
    return report
