"""Category and time-bucket aggregation over atomic entries."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Callable, Iterable

from finrecon.domain.categories import LabelRegistry
from finrecon.domain.entities import AtomicEntry, BucketSize, TimeSeriesPoint
from finrecon.domain.filters import ReportFilter
from finrecon.utils.date_parser import month_start, week_start

ZERO = Decimal("0")

BUCKET_FUNCTIONS: dict[BucketSize, Callable[[date], date]] = {
    BucketSize.DAY: lambda value: value,
    BucketSize.WEEK: week_start,
    BucketSize.MONTH: month_start,
}


class CategoryAggregator:
    """Sum filtered atomic entries by category and by time bucket.

    The entry list is filtered once at construction; every method works on
    that filtered view and returns fresh containers.
    """

    def __init__(self, entries: Iterable[AtomicEntry], report_filter: ReportFilter):
        """Initialize aggregator.

        Args:
            entries: Atomic entries from the normalizer
            report_filter: Range, category and type selection
        """
        self.report_filter = report_filter
        self._entries = tuple(entry for entry in entries if report_filter.matches(entry))

    def entries(self) -> tuple[AtomicEntry, ...]:
        """Return the entries that passed the filter, in input order."""
        return self._entries

    def total(self) -> Decimal:
        """Return the sum of all filtered entries."""
        return sum((entry.amount for entry in self._entries), ZERO)

    def by_category(self) -> dict[str, Decimal]:
        """Sum filtered entries per category.

        Keys are display labels (the first label seen for each canonical
        key) in first-occurrence order. Categories totalling zero are left
        out rather than reported as zero.
        """
        labels = LabelRegistry()
        totals: dict[str, Decimal] = {}
        for entry in self._entries:
            key = labels.register(entry.category)
            totals[key] = totals.get(key, ZERO) + entry.amount
        return {labels.label(key): amount for key, amount in totals.items() if amount != 0}

    def by_bucket(self, bucket: BucketSize) -> tuple[TimeSeriesPoint, ...]:
        """Sum filtered entries per time bucket, ascending by bucket start."""
        bucket_start = BUCKET_FUNCTIONS[bucket]
        totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
        for entry in self._entries:
            totals[bucket_start(entry.date)] += entry.amount
        return tuple(
            TimeSeriesPoint(bucket_start=start, amount=totals[start]) for start in sorted(totals)
        )

    def by_date(self) -> tuple[TimeSeriesPoint, ...]:
        """Sum filtered entries per calendar day."""
        return self.by_bucket(BucketSize.DAY)

    def by_week(self) -> tuple[TimeSeriesPoint, ...]:
        """Sum filtered entries per ISO week, keyed by the week's Monday."""
        return self.by_bucket(BucketSize.WEEK)

    def by_month(self) -> tuple[TimeSeriesPoint, ...]:
        """Sum filtered entries per calendar month."""
        return self.by_bucket(BucketSize.MONTH)
