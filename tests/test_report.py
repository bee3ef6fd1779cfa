"""Tests for report assembly."""

from datetime import date
from decimal import Decimal

import pytest

from builders import make_budget, make_split, make_transaction
from finrecon.domain.entities import (
    BucketSize,
    BudgetType,
    ComparisonResult,
    ComparisonStatus,
    FilterType,
    NoDataCondition,
    Outlier,
    Report,
    TransactionType,
    WarningKind,
)
from finrecon.domain.errors import ValidationError
from finrecon.domain.filters import ReportFilter
from finrecon.domain.report import build_report, category_breakdown, find_outliers


def _january(**kwargs):
    return ReportFilter(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), **kwargs)


def test_food_budget_end_to_end():
    transactions = [
        make_transaction(id=1, amount="500", category="Food", on=date(2024, 1, 5)),
        make_transaction(id=2, amount="300", category="Food", on=date(2024, 1, 12)),
    ]
    budgets = [make_budget(category="Food", amount="1000")]

    report = build_report(transactions, budgets, _january(type=FilterType.EXPENSE))

    assert isinstance(report, Report)
    comparison = report.comparisons[BudgetType.EXPENSE]
    assert isinstance(comparison, ComparisonResult)
    (row,) = comparison.rows
    assert row.category == "Food"
    assert row.budgeted_amount == Decimal("1000")
    assert row.actual_amount == Decimal("800")
    assert row.difference == Decimal("200")
    assert row.status == ComparisonStatus.WITHIN_BUDGET


def test_no_transactions_and_no_budgets_is_no_data():
    result = build_report([], [], _january())

    assert isinstance(result, NoDataCondition)
    assert result.budget_type is None


def test_activity_outside_window_is_no_data():
    transactions = [make_transaction(on=date(2023, 6, 1))]

    result = build_report(transactions, [], _january(type=FilterType.EXPENSE))

    assert isinstance(result, NoDataCondition)
    assert result.budget_type == BudgetType.EXPENSE


def test_both_types_report_each_comparison():
    transactions = [
        make_transaction(id=1, amount="200", category="Food", on=date(2024, 1, 3)),
        make_transaction(
            id=2, amount="5000", category="Salary", on=date(2024, 1, 25), type=TransactionType.CREDIT
        ),
    ]
    budgets = [
        make_budget(id=1, category="Food", amount="300"),
        make_budget(id=2, category="Salary", amount="6000", type=BudgetType.INCOME),
    ]

    report = build_report(transactions, budgets, _january())

    assert list(report.comparisons) == [BudgetType.EXPENSE, BudgetType.INCOME]
    income = report.comparisons[BudgetType.INCOME]
    assert income.rows[0].difference == Decimal("-1000")
    assert income.rows[0].status == ComparisonStatus.GOAL_SHORTFALL
    assert report.summary.grand_total == Decimal("5200")


def test_both_types_keep_breakdown_and_trend_per_type():
    transactions = [
        make_transaction(id=1, amount="150", category="Food", on=date(2024, 1, 3)),
        make_transaction(id=2, amount="50", category="Rent", on=date(2024, 1, 4)),
        make_transaction(
            id=3, amount="5000", category="Salary", on=date(2024, 1, 25), type=TransactionType.CREDIT
        ),
    ]

    report = build_report(transactions, [], _january(), bucket=BucketSize.MONTH)

    expense = {s.category: s.percentage for s in report.type_breakdowns[BudgetType.EXPENSE]}
    income = {s.category: s.percentage for s in report.type_breakdowns[BudgetType.INCOME]}
    assert expense == {"Food": Decimal("75"), "Rent": Decimal("25")}
    assert income == {"Salary": Decimal("100")}
    assert [(p.bucket_start, p.amount) for p in report.type_time_series[BudgetType.EXPENSE]] == [
        (date(2024, 1, 1), Decimal("200"))
    ]
    assert [(p.bucket_start, p.amount) for p in report.type_time_series[BudgetType.INCOME]] == [
        (date(2024, 1, 1), Decimal("5000"))
    ]
    assert report.summary.grand_total == Decimal("5200")


def test_single_type_report_has_one_typed_breakdown():
    transactions = [make_transaction(amount="80", category="Food", on=date(2024, 1, 2))]

    report = build_report(transactions, [], _january(type=FilterType.EXPENSE))

    assert list(report.type_breakdowns) == [BudgetType.EXPENSE]
    assert report.type_breakdowns[BudgetType.EXPENSE] == report.category_breakdown


def test_one_side_without_data_is_reported_as_no_data():
    transactions = [make_transaction(amount="20", on=date(2024, 1, 2))]

    report = build_report(transactions, [], _january())

    assert isinstance(report.comparisons[BudgetType.EXPENSE], ComparisonResult)
    assert isinstance(report.comparisons[BudgetType.INCOME], NoDataCondition)


def test_breakdown_percentages_sum_to_hundred():
    transactions = [
        make_transaction(id=1, amount="100", category="Food", on=date(2024, 1, 2)),
        make_transaction(id=2, amount="100", category="Rent", on=date(2024, 1, 3)),
        make_transaction(id=3, amount="100", category="Travel", on=date(2024, 1, 4)),
    ]

    report = build_report(transactions, [], _january(type=FilterType.EXPENSE))

    total = sum(share.percentage for share in report.category_breakdown)
    assert abs(total - Decimal("100")) < Decimal("0.000001")
    assert sum(share.amount for share in report.category_breakdown) == report.summary.grand_total


def test_breakdown_with_zero_total_has_zero_percentages():
    shares = category_breakdown({"Food": Decimal("0")}, Decimal("0"))

    assert [share.percentage for share in shares] == [Decimal("0")]


def test_summary_counts_parent_transactions_and_ranks_categories():
    transactions = [
        make_transaction(
            id=1,
            amount="300",
            on=date(2024, 1, 2),
            sub_categories=(make_split("Food", "200"), make_split("Transport", "100")),
        ),
        make_transaction(id=2, amount="50", category="Rent", on=date(2024, 1, 3)),
        make_transaction(id=3, amount="250", category="Travel", on=date(2024, 1, 4)),
    ]

    summary = build_report(transactions, [], _january(type=FilterType.EXPENSE)).summary

    assert summary.transaction_count == 3
    assert summary.grand_total == Decimal("600")
    assert summary.average_transaction_amount == Decimal("200")
    assert summary.top_category == "Travel"
    assert [share.category for share in summary.top_categories] == ["Travel", "Food", "Transport"]


def test_outliers_are_two_deviations_above_mean():
    peers = [
        Outlier(transaction_id=i, category="Food", amount=Decimal("10"), date=date(2024, 1, i))
        for i in range(1, 11)
    ]
    spike = Outlier(transaction_id=99, category="Travel", amount=Decimal("500"), date=date(2024, 1, 20))

    assert find_outliers(peers + [spike]) == (spike,)
    assert find_outliers(peers) == ()
    assert find_outliers([spike]) == ()


def test_report_carries_warnings_and_trend():
    transactions = [
        make_transaction(id=1, amount="-5", category="Food", on=date(2024, 1, 2)),
        make_transaction(id=2, amount="40", category="Food", on=date(2024, 1, 9)),
    ]
    budgets = [make_budget(category="Food", amount="100")]

    report = build_report(
        transactions, budgets, _january(type=FilterType.EXPENSE), bucket=BucketSize.MONTH
    )

    assert [warning.kind for warning in report.warnings] == [WarningKind.NEGATIVE_AMOUNT]
    assert report.bucket == BucketSize.MONTH
    assert [(p.bucket_start, p.amount) for p in report.time_series] == [
        (date(2024, 1, 1), Decimal("40"))
    ]


def test_unknown_bucket_is_rejected():
    with pytest.raises(ValidationError, match="Invalid bucket"):
        build_report([], [], ReportFilter(), bucket="hour")


def test_report_does_not_mutate_inputs():
    transactions = [make_transaction(on=date(2024, 1, 2))]
    budgets = [make_budget()]
    snapshot = (list(transactions), list(budgets))

    first = build_report(transactions, budgets, _january())
    second = build_report(transactions, budgets, _january())

    assert (transactions, budgets) == snapshot
    assert first == second
