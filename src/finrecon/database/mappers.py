"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the domain entities stay stable
when the storage schema changes.
"""

from finrecon.domain import entities as domain
from finrecon.database.models import (
    Budget as ORMBudget,
    Transaction as ORMTransaction,
    TransactionSplit as ORMTransactionSplit,
)


def split_to_domain(orm_split: ORMTransactionSplit) -> domain.SubCategory:
    """Convert SQLAlchemy TransactionSplit model to domain SubCategory."""
    return domain.SubCategory(category=orm_split.category, amount=orm_split.amount)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    sub_categories = None
    if orm_transaction.splits:
        sub_categories = tuple(split_to_domain(split) for split in orm_transaction.splits)

    return domain.Transaction(
        id=orm_transaction.id,
        account_ref=orm_transaction.account_ref,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        date=orm_transaction.date,
        description=orm_transaction.description,
        source=domain.TransactionSource(orm_transaction.source),
        sub_categories=sub_categories,
        status=domain.TransactionStatus(orm_transaction.status),
    )


def budget_to_domain(orm_budget: ORMBudget) -> domain.Budget:
    """Convert SQLAlchemy Budget model to domain Budget entity."""
    return domain.Budget(
        id=orm_budget.id,
        category=orm_budget.category,
        type=domain.BudgetType(orm_budget.type),
        amount=orm_budget.amount,
        created_at=orm_budget.created_at,
        period=domain.BudgetPeriod(orm_budget.period) if orm_budget.period else None,
    )
