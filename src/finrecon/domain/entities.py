"""Domain model entities for finrecon.

These are pure data classes representing business concepts, independent of
the storage schema. Records (Transaction, Budget) come from the external
stores; every other entity here is derived and recomputed on each call.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from finrecon.domain.filters import ReportFilter


class TransactionType(str, Enum):
    """Direction of money movement on a transaction."""

    DEBIT = "debit"
    CREDIT = "credit"


class TransactionSource(str, Enum):
    """Where a transaction record originated."""

    MANUAL = "manual"
    SCAN = "scan"
    IMPORT = "import"


class TransactionStatus(str, Enum):
    """Settlement status of a transaction."""

    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class BudgetType(str, Enum):
    """Kind of budget: a spending cap or an income goal."""

    EXPENSE = "expense"
    INCOME = "income"

    @property
    def transaction_type(self) -> TransactionType:
        """Transaction type whose activity is measured against this budget type."""
        if self is BudgetType.EXPENSE:
            return TransactionType.DEBIT
        return TransactionType.CREDIT


class BudgetPeriod(str, Enum):
    """Recurrence window a budget is set for."""

    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"


class FilterType(str, Enum):
    """Type selector accepted by report filters."""

    EXPENSE = "expense"
    INCOME = "income"
    BOTH = "both"

    @property
    def budget_types(self) -> tuple[BudgetType, ...]:
        """Budget types covered by this selector, in report order."""
        if self is FilterType.EXPENSE:
            return (BudgetType.EXPENSE,)
        if self is FilterType.INCOME:
            return (BudgetType.INCOME,)
        return (BudgetType.EXPENSE, BudgetType.INCOME)

    @property
    def transaction_types(self) -> frozenset[TransactionType]:
        """Transaction types covered by this selector."""
        return frozenset(t.transaction_type for t in self.budget_types)


class ComparisonStatus(str, Enum):
    """Outcome of comparing actual activity against a budget."""

    WITHIN_BUDGET = "within-budget"
    OVER_BUDGET = "over-budget"
    GOAL_MET = "goal-met"
    GOAL_SHORTFALL = "goal-shortfall"


class BucketSize(str, Enum):
    """Time bucket used for trend series."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class WarningKind(str, Enum):
    """Categories of non-fatal data integrity problems."""

    SUBCATEGORY_MISMATCH = "subcategory-mismatch"
    MALFORMED_SUBCATEGORIES = "malformed-subcategories"
    NEGATIVE_AMOUNT = "negative-amount"
    UNPARSEABLE_CATEGORY = "unparseable-category"
    INVALID_AMOUNT = "invalid-amount"


@dataclass(frozen=True)
class SubCategory:
    """One category slice of a multi-category (scan-derived) transaction.

    Fields are optional because scanned data may be incomplete; the
    normalizer decides whether a set of slices is usable.
    """

    category: Optional[str]
    amount: Optional[Decimal]


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity."""

    id: int
    account_ref: str
    type: TransactionType
    amount: Decimal
    category: Optional[str]
    date: date
    description: Optional[str] = None
    source: TransactionSource = TransactionSource.MANUAL
    sub_categories: Optional[tuple[SubCategory, ...]] = None
    status: TransactionStatus = TransactionStatus.COMPLETED


@dataclass(frozen=True)
class Budget:
    """Budget domain entity."""

    id: int
    category: str
    type: BudgetType
    amount: Decimal
    created_at: datetime
    period: Optional[BudgetPeriod] = None


@dataclass(frozen=True)
class AtomicEntry:
    """A single (category, amount, date, type) contribution."""

    category: str
    category_key: str
    amount: Decimal
    date: date
    type: TransactionType
    source: TransactionSource
    transaction_id: Optional[int] = None


@dataclass(frozen=True)
class DataIntegrityWarning:
    """Non-fatal problem found while normalizing input records."""

    kind: WarningKind
    transaction_id: Optional[int]
    message: str


@dataclass(frozen=True)
class NoDataCondition:
    """Sentinel result: nothing to compare for the requested window and type.

    Distinct from a successful report whose values happen to be zero.
    """

    budget_type: Optional[BudgetType] = None
    reason: str = "No budgets or matching transactions for the requested window"


@dataclass(frozen=True)
class ComparisonRow:
    """One category's budgeted vs. actual amounts."""

    category: str
    budgeted_amount: Decimal
    actual_amount: Decimal
    difference: Decimal
    status: ComparisonStatus


@dataclass(frozen=True)
class ComparisonResult:
    """Comparison rows for one budget type plus the totals row."""

    budget_type: BudgetType
    rows: tuple[ComparisonRow, ...]
    totals: ComparisonRow


@dataclass(frozen=True)
class BudgetAlert:
    """Notification that an expense budget has been exceeded."""

    category: str
    budgeted_amount: Decimal
    spent_amount: Decimal
    period: Optional[BudgetPeriod]
    message: str


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Total activity for one time bucket."""

    bucket_start: date
    amount: Decimal


@dataclass(frozen=True)
class CategoryShare:
    """A category total and its percentage of the grand total."""

    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class Outlier:
    """A transaction that is unusually large relative to its peers."""

    transaction_id: Optional[int]
    category: str
    amount: Decimal
    date: date


@dataclass(frozen=True)
class ReportSummary:
    """Numeric summary handed to narrative generators."""

    grand_total: Decimal
    transaction_count: int
    average_transaction_amount: Decimal
    top_category: Optional[str]
    top_categories: tuple[CategoryShare, ...] = ()
    outliers: tuple[Outlier, ...] = ()


@dataclass(frozen=True)
class PageWindow:
    """Pagination window over a separately sorted and filtered list."""

    current_page: int
    total_pages: int
    total_count: int
    page_size: int

    @property
    def offset(self) -> int:
        """Index of the first item on the current page."""
        return (self.current_page - 1) * self.page_size


@dataclass(frozen=True)
class Report:
    """Combined breakdown, comparison and trend output for one request."""

    filter: "ReportFilter"
    category_breakdown: tuple[CategoryShare, ...]
    comparisons: dict[BudgetType, "ComparisonResult | NoDataCondition"]
    time_series: tuple[TimeSeriesPoint, ...]
    summary: ReportSummary
    bucket: BucketSize = BucketSize.WEEK
    warnings: tuple[DataIntegrityWarning, ...] = field(default_factory=tuple)
    # Keyed by each selected budget type; percentages are within that type
    type_breakdowns: dict[BudgetType, tuple[CategoryShare, ...]] = field(default_factory=dict)
    type_time_series: dict[BudgetType, tuple[TimeSeriesPoint, ...]] = field(default_factory=dict)
