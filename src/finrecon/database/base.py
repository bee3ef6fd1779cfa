"""Abstract transaction and budget store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from finrecon.domain.entities import (
    Budget,
    BudgetPeriod,
    BudgetType,
    PageWindow,
    SubCategory,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)
from finrecon.domain.pagination import DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class TransactionQuery:
    """Filter for list_transactions.

    A page_size of None returns every matching transaction on one page.
    """

    page: int = 1
    page_size: Optional[int] = DEFAULT_PAGE_SIZE
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    type: Optional[TransactionType] = None


@dataclass(frozen=True)
class TransactionPage:
    """One page of transactions plus the size of the full result."""

    items: tuple[Transaction, ...]
    total_count: int
    window: Optional[PageWindow] = None


class Database(ABC):
    """Abstract store interface for finrecon."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        type: TransactionType,
        amount: Decimal,
        category: Optional[str],
        date: date,
        account_ref: str = "",
        description: Optional[str] = None,
        source: TransactionSource = TransactionSource.MANUAL,
        status: TransactionStatus = TransactionStatus.COMPLETED,
        sub_categories: Optional[Sequence[SubCategory]] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and its sub-category slices."""
        pass

    @abstractmethod
    def list_transactions(self, query: TransactionQuery) -> TransactionPage:
        """List transactions matching a query, newest first.

        The category filter matches either the top-level category or any
        sub-category slice, compared on the canonical category key.
        """
        pass

    # Budget operations
    @abstractmethod
    def create_budget(
        self,
        category: str,
        type: BudgetType,
        amount: Decimal,
        period: Optional[BudgetPeriod] = None,
        created_at: Optional[datetime] = None,
    ) -> int:
        """Create a budget. Returns budget ID."""
        pass

    @abstractmethod
    def get_budget(self, budget_id: int) -> Optional[Budget]:
        """Get budget by ID."""
        pass

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets ordered by type, then category."""
        pass

    @abstractmethod
    def delete_budget(self, budget_id: int) -> None:
        """Delete a budget."""
        pass
