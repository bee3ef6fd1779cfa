"""Budget period windows and applicability."""

from datetime import date, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from finrecon.domain import errors
from finrecon.domain.entities import Budget, BudgetPeriod
from finrecon.utils.date_parser import month_start, quarter_start, to_calendar_date, week_start


def parse_budget_period(value: Union[str, BudgetPeriod, None]) -> Optional[BudgetPeriod]:
    """Coerce a period name such as "monthly" or "Monthly".

    Raises:
        ValidationError: If the name is not a known period
    """
    if value is None or isinstance(value, BudgetPeriod):
        return value
    name = str(value).strip().capitalize()
    if not name:
        return None
    try:
        return BudgetPeriod(name)
    except ValueError:
        raise errors.ValidationError(
            errors.invalid_choice("budget period", value, [p.value for p in BudgetPeriod])
        )


def determine_budget_period(start_date: Optional[date], end_date: Optional[date]) -> BudgetPeriod:
    """Pick the budget period that best matches a reporting window.

    Windows of up to 7 days are weekly, up to 31 monthly, up to 90 quarterly
    and anything longer yearly. Open-ended windows default to monthly.
    """
    if start_date is None or end_date is None:
        return BudgetPeriod.MONTHLY
    days = (end_date - start_date).days
    if days <= 7:
        return BudgetPeriod.WEEKLY
    if days <= 31:
        return BudgetPeriod.MONTHLY
    if days <= 90:
        return BudgetPeriod.QUARTERLY
    return BudgetPeriod.YEARLY


def period_window(period: BudgetPeriod, anchor: date) -> tuple[date, date]:
    """Return the inclusive calendar window of a period containing anchor."""
    anchor = to_calendar_date(anchor)
    if period == BudgetPeriod.WEEKLY:
        start = week_start(anchor)
        return start, start + timedelta(days=6)
    if period == BudgetPeriod.MONTHLY:
        start = month_start(anchor)
    elif period == BudgetPeriod.QUARTERLY:
        start = quarter_start(anchor)
    else:
        return date(anchor.year, 1, 1), date(anchor.year, 12, 31)
    months = 1 if period == BudgetPeriod.MONTHLY else 3
    return start, start + relativedelta(months=months) - timedelta(days=1)


def budget_applies(
    budget: Budget, start_date: Optional[date], end_date: Optional[date]
) -> bool:
    """Check whether a budget covers any part of a reporting window.

    Budgets without a period are standing targets and apply everywhere.
    Periodic budgets apply when the period window around their creation date
    overlaps the requested window.
    """
    if budget.period is None:
        return True
    budget_start, budget_end = period_window(budget.period, budget.created_at)
    if start_date is not None and budget_end < start_date:
        return False
    if end_date is not None and budget_start > end_date:
        return False
    return True
