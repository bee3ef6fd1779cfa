"""Report domain service.

Fetches fully resolved collections from the stores and hands them to the
pure reconciliation functions. Nothing is computed here that the pure
functions do not also expose.
"""

from datetime import date
from typing import Optional, Union

from finrecon.database.base import Database
from finrecon.domain.entities import (
    BucketSize,
    BudgetType,
    ComparisonResult,
    FilterType,
    NoDataCondition,
    Report,
    TimeSeriesPoint,
)
from finrecon.domain.filters import ReportFilter
from finrecon.domain.normalizer import normalize_transactions
from finrecon.domain.report import build_report, compare_entries
from finrecon.domain.timeseries import build_time_series
from finrecon.domain.transaction import TransactionService


class ReportService:
    """Service for building comparison reports and trend series."""

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db
        self.transaction_service = TransactionService(db)

    def build_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Union[FilterType, str, None] = None,
        bucket: Union[BucketSize, str] = BucketSize.WEEK,
    ) -> Union[Report, NoDataCondition]:
        """Build the full report for a filter.

        Raises:
            ValidationError: If the filter is malformed
        """
        report_filter = ReportFilter.create(start_date, end_date, category, type)
        transactions = self.transaction_service.fetch_for_filter(report_filter)
        return build_report(transactions, self.db.list_budgets(), report_filter, bucket)

    def compare(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Union[FilterType, str, None] = None,
    ) -> dict[BudgetType, Union[ComparisonResult, NoDataCondition]]:
        """Compare budgets against actuals for each selected budget type."""
        report_filter = ReportFilter.create(start_date, end_date, category, type)
        transactions = self.transaction_service.fetch_for_filter(report_filter)
        normalized = normalize_transactions(transactions)
        return compare_entries(normalized.entries, self.db.list_budgets(), report_filter)

    def time_series(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Union[FilterType, str, None] = FilterType.EXPENSE,
        bucket: Union[BucketSize, str] = BucketSize.WEEK,
    ) -> tuple[TimeSeriesPoint, ...]:
        """Build a trend series for a filter."""
        report_filter = ReportFilter.create(start_date, end_date, category, type)
        transactions = self.transaction_service.fetch_for_filter(report_filter)
        normalized = normalize_transactions(transactions)
        return build_time_series(normalized.entries, report_filter, bucket)
