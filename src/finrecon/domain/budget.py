"""Budget domain service."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from finrecon.database.base import Database
from finrecon.domain import errors
from finrecon.domain.categories import category_key, clean_label
from finrecon.domain.comparator import check_budget_alert
from finrecon.domain.entities import Budget, BudgetAlert, BudgetPeriod, BudgetType
from finrecon.domain.periods import parse_budget_period, period_window
from finrecon.domain.transaction import TransactionService


class BudgetService:
    """Service for managing budgets and checking spending against them."""

    def __init__(self, db: Database):
        """Initialize budget service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def create_budget(
        self,
        category: str,
        type: Union[BudgetType, str],
        amount: Decimal,
        period: Union[BudgetPeriod, str, None] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a budget.

        Args:
            category: Category label the budget applies to
            type: expense (spending cap) or income (goal)
            amount: Non-negative budget amount
            period: Optional Weekly/Monthly/Quarterly/Yearly period
            created_at: Creation time anchoring the period window

        Returns:
            Budget ID

        Raises:
            ValidationError: If any field is invalid
        """
        label = clean_label(category)
        if label is None:
            raise errors.ValidationError(errors.empty_category())
        try:
            budget_type = BudgetType(type)
        except ValueError:
            raise errors.ValidationError(
                errors.invalid_choice("budget type", type, [t.value for t in BudgetType])
            )
        if amount is None or amount < 0:
            raise errors.ValidationError(errors.negative_amount(amount))

        return self.db.create_budget(
            category=label,
            type=budget_type,
            amount=amount,
            period=parse_budget_period(period),
            created_at=created_at,
        )

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        return self.db.get_budget(budget_id)

    def list_budgets(self, type: Union[BudgetType, str, None] = None) -> list[Budget]:
        """List budgets, optionally restricted to one type."""
        budgets = self.db.list_budgets()
        if type is None:
            return budgets
        budget_type = BudgetType(type)
        return [budget for budget in budgets if budget.type == budget_type]

    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget.

        Raises:
            NotFoundError: If the budget doesn't exist
        """
        self.db.delete_budget(budget_id)

    def check_new_expense(
        self, category: str, amount: Decimal, txn_date: date
    ) -> list[BudgetAlert]:
        """Check whether a not-yet-recorded expense would exceed any budget.

        Each expense budget for the category is checked over its own period
        window around txn_date (monthly when the budget has no period).

        Args:
            category: Category of the new expense
            amount: Amount of the new expense
            txn_date: Date of the new expense

        Returns:
            One BudgetAlert per budget that would be exceeded
        """
        label = clean_label(category)
        if label is None:
            return []
        key = category_key(label)

        alerts = []
        for budget in self.list_budgets(BudgetType.EXPENSE):
            if category_key(budget.category) != key:
                continue
            start, end = period_window(budget.period or BudgetPeriod.MONTHLY, txn_date)
            spent = self.transaction_service.spent_in_window(label, start, end)
            alert = check_budget_alert(budget, spent, amount)
            if alert is not None:
                alerts.append(alert)
        return alerts
