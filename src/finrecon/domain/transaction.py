"""Transaction domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, Union

from finrecon.database.base import Database, TransactionPage, TransactionQuery
from finrecon.domain import errors
from finrecon.domain.aggregator import CategoryAggregator
from finrecon.domain.categories import clean_label
from finrecon.domain.entities import (
    FilterType,
    SubCategory,
    Transaction,
    TransactionSource,
    TransactionStatus,
    TransactionType,
)
from finrecon.domain.filters import ReportFilter
from finrecon.domain.normalizer import normalize_transactions
from finrecon.domain.pagination import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)


def _store_type(filter_type: FilterType) -> Optional[TransactionType]:
    types = filter_type.transaction_types
    if len(types) == 1:
        return next(iter(types))
    return None


class TransactionService:
    """Service for recording and fetching transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        type: Union[TransactionType, str],
        amount: Decimal,
        category: Optional[str],
        date: date,
        account_ref: str = "",
        description: Optional[str] = None,
        source: Union[TransactionSource, str] = TransactionSource.MANUAL,
        sub_categories: Optional[Sequence[SubCategory]] = None,
    ) -> int:
        """Record a new transaction.

        Args:
            type: debit or credit
            amount: Positive transaction amount
            category: Category label; may be omitted when sub_categories are
                given, in which case the first slice's category is used
            date: Transaction date
            account_ref: Account the transaction belongs to
            description: Optional description
            source: manual, scan or import
            sub_categories: Optional category slices for multi-category
                transactions; each needs a category and a positive amount

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid
        """
        try:
            txn_type = TransactionType(type)
        except ValueError:
            raise errors.ValidationError(
                errors.invalid_choice("transaction type", type, [t.value for t in TransactionType])
            )
        try:
            txn_source = TransactionSource(source)
        except ValueError:
            raise errors.ValidationError(
                errors.invalid_choice("source", source, [s.value for s in TransactionSource])
            )

        if amount is None or amount <= 0:
            raise errors.ValidationError(errors.non_positive_amount(amount))

        slices = tuple(sub_categories or ())
        for sub in slices:
            if clean_label(sub.category) is None:
                raise errors.ValidationError(errors.empty_category())
            if sub.amount is None or sub.amount <= 0:
                raise errors.ValidationError(errors.non_positive_amount(sub.amount))

        label = clean_label(category)
        if label is None:
            if not slices:
                raise errors.ValidationError(errors.empty_category())
            label = clean_label(slices[0].category)

        if slices:
            split_total = sum((sub.amount for sub in slices), Decimal("0"))
            if split_total != amount:
                logger.warning(
                    "Sub-categories sum to %s but transaction amount is %s", split_total, amount
                )

        return self.db.create_transaction(
            type=txn_type,
            amount=amount,
            category=label,
            date=date,
            account_ref=account_ref,
            description=description,
            source=txn_source,
            status=TransactionStatus.COMPLETED,
            sub_categories=slices or None,
        )

    def import_transaction(self, txn: Transaction) -> int:
        """Store a transaction parsed from a raw record, as received.

        Unlike create_transaction, malformed sub-categories and negative
        amounts are kept so that normalization can report them.
        """
        return self.db.create_transaction(
            type=txn.type,
            amount=txn.amount,
            category=txn.category if isinstance(txn.category, str) else None,
            date=txn.date,
            account_ref=txn.account_ref,
            description=txn.description,
            source=txn.source,
            status=txn.status,
            sub_categories=txn.sub_categories,
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        self.db.delete_transaction(transaction_id)

    def list_transactions(
        self,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        type: Union[FilterType, str, None] = None,
    ) -> TransactionPage:
        """List one page of transactions, newest first.

        Out-of-range pages are clamped; the returned window reports the page
        actually served.

        Raises:
            ValidationError: If the filter or page size is invalid
        """
        report_filter = ReportFilter.create(start_date, end_date, category, type)
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
            raise errors.ValidationError(errors.non_positive_page_size(page_size))
        return self.db.list_transactions(self._query(report_filter, page=page, page_size=page_size))

    def fetch_for_filter(self, report_filter: ReportFilter) -> tuple[Transaction, ...]:
        """Fetch every transaction that may contribute to a filtered report."""
        page = self.db.list_transactions(self._query(report_filter, page=1, page_size=None))
        return page.items

    def spent_in_window(self, category: str, start_date: date, end_date: date) -> Decimal:
        """Sum completed debit activity for a category over an inclusive window."""
        report_filter = ReportFilter(
            start_date=start_date, end_date=end_date, category=category, type=FilterType.EXPENSE
        )
        normalized = normalize_transactions(self.fetch_for_filter(report_filter))
        return CategoryAggregator(normalized.entries, report_filter).total()

    def _query(
        self, report_filter: ReportFilter, page: int, page_size: Optional[int]
    ) -> TransactionQuery:
        return TransactionQuery(
            page=page,
            page_size=page_size,
            start_date=report_filter.start_date,
            end_date=report_filter.end_date,
            category=report_filter.category,
            type=_store_type(report_filter.type),
        )
