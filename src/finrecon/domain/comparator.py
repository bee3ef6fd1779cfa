"""Budget-vs-actual comparison.

Expense budgets are spending caps: spending less than the budget is good and
the difference is ``budgeted - actual``. Income budgets are goals: earning
more than the goal is good and the difference is ``actual - budgeted``. In
both cases a non-negative difference is the favourable outcome.
"""

import logging
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from finrecon.domain import errors
from finrecon.domain.categories import LabelRegistry, category_key
from finrecon.domain.entities import (
    Budget,
    BudgetAlert,
    BudgetType,
    ComparisonResult,
    ComparisonRow,
    ComparisonStatus,
    NoDataCondition,
)
from finrecon.domain.filters import ReportFilter
from finrecon.domain.periods import budget_applies

logger = logging.getLogger(__name__)

TOTAL_LABEL = "Total"

ZERO = Decimal("0")


def _difference(budgeted: Decimal, actual: Decimal, budget_type: BudgetType) -> Decimal:
    if budget_type == BudgetType.EXPENSE:
        return budgeted - actual
    return actual - budgeted


def _status(difference: Decimal, budget_type: BudgetType) -> ComparisonStatus:
    if budget_type == BudgetType.EXPENSE:
        return ComparisonStatus.WITHIN_BUDGET if difference >= 0 else ComparisonStatus.OVER_BUDGET
    return ComparisonStatus.GOAL_MET if difference >= 0 else ComparisonStatus.GOAL_SHORTFALL


def build_row(
    category: str, budgeted: Decimal, actual: Decimal, budget_type: BudgetType
) -> ComparisonRow:
    """Build one comparison row using the sign convention of budget_type."""
    difference = _difference(budgeted, actual, budget_type)
    return ComparisonRow(
        category=category,
        budgeted_amount=budgeted,
        actual_amount=actual,
        difference=difference,
        status=_status(difference, budget_type),
    )


def _totals_by_key(amounts: Mapping[str, Decimal], labels: LabelRegistry) -> dict[str, Decimal]:
    totals: dict[str, Decimal] = {}
    for label, amount in amounts.items():
        amount = Decimal(amount)
        if amount < 0:
            raise errors.ValidationError(errors.negative_amount(amount))
        key = labels.register(label)
        totals[key] = totals.get(key, ZERO) + amount
    return totals


def compare(
    budgeted: Mapping[str, Decimal],
    actual: Mapping[str, Decimal],
    budget_type: Union[BudgetType, str],
) -> Union[ComparisonResult, NoDataCondition]:
    """Join budget targets against actual totals per category.

    Categories are matched on their canonical key. Rows follow the
    first-occurrence order of the actual map, followed by categories that only
    have a budget. A missing side counts as zero.

    Args:
        budgeted: Category -> budget amount, restricted to budget_type
        actual: Category -> actual amount for the matching transaction type
        budget_type: Whether the budgets are expense caps or income goals

    Returns:
        ComparisonResult, or NoDataCondition when both maps are empty

    Raises:
        ValidationError: If budget_type is unknown or an amount is negative
    """
    try:
        budget_type = BudgetType(budget_type)
    except ValueError:
        raise errors.ValidationError(
            errors.invalid_choice("budget type", budget_type, [t.value for t in BudgetType])
        )

    if not budgeted and not actual:
        logger.info("Nothing to compare for %s budgets", budget_type.value)
        return NoDataCondition(
            budget_type=budget_type,
            reason=f"No {budget_type.value} budgets or matching transactions for the requested window",
        )

    labels = LabelRegistry()
    actual_totals = _totals_by_key(actual, labels)
    budget_totals = _totals_by_key(budgeted, labels)

    rows = tuple(
        build_row(
            labels.label(key),
            budget_totals.get(key, ZERO),
            actual_totals.get(key, ZERO),
            budget_type,
        )
        for key in dict.fromkeys([*actual_totals, *budget_totals])
    )
    totals = build_row(
        TOTAL_LABEL,
        sum((row.budgeted_amount for row in rows), ZERO),
        sum((row.actual_amount for row in rows), ZERO),
        budget_type,
    )
    return ComparisonResult(budget_type=budget_type, rows=rows, totals=totals)


def budget_totals_by_category(
    budgets: Iterable[Budget], budget_type: BudgetType, report_filter: ReportFilter
) -> dict[str, Decimal]:
    """Sum budgets of one type per category for a reporting window.

    Budgets are kept when they match the filter's category and their period
    (if any) overlaps the filter's date range. Several budgets for the same
    category add up.
    """
    labels = LabelRegistry()
    totals: dict[str, Decimal] = {}
    for budget in budgets:
        if budget.type != budget_type:
            continue
        if not report_filter.matches_category(category_key(budget.category)):
            continue
        if not budget_applies(budget, report_filter.start_date, report_filter.end_date):
            continue
        key = labels.register(budget.category)
        totals[key] = totals.get(key, ZERO) + budget.amount
    return {labels.label(key): amount for key, amount in totals.items()}


def check_budget_alert(
    budget: Budget, spent: Decimal, new_amount: Decimal
) -> Optional[BudgetAlert]:
    """Check whether adding new_amount pushes spending past an expense budget.

    Args:
        budget: Expense budget for the transaction's category
        spent: Amount already spent in the budget's window
        new_amount: Amount of the transaction being added

    Returns:
        BudgetAlert if the new total exceeds the budget, otherwise None
    """
    if budget.type != BudgetType.EXPENSE:
        return None
    new_total = spent + new_amount
    if new_total <= budget.amount:
        return None
    period = f" ({budget.period.value})" if budget.period else ""
    return BudgetAlert(
        category=budget.category,
        budgeted_amount=budget.amount,
        spent_amount=new_total,
        period=budget.period,
        message=(
            f"Budget exceeded for {budget.category}{period}. "
            f"Budget: {budget.amount:,.2f}, Spent: {new_total:,.2f}"
        ),
    )
