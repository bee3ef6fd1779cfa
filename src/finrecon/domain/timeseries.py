"""Trend series for charting."""

from typing import Iterable, Union

from finrecon.domain import errors
from finrecon.domain.aggregator import CategoryAggregator
from finrecon.domain.entities import AtomicEntry, BucketSize, TimeSeriesPoint
from finrecon.domain.filters import ReportFilter


def parse_bucket(value: Union[str, BucketSize]) -> BucketSize:
    """Coerce a bucket name.

    Raises:
        ValidationError: If the name is not day, week or month
    """
    if isinstance(value, BucketSize):
        return value
    try:
        return BucketSize(str(value).strip().lower())
    except ValueError:
        raise errors.ValidationError(
            errors.invalid_choice("bucket", value, [b.value for b in BucketSize])
        )


def build_time_series(
    entries: Iterable[AtomicEntry],
    report_filter: ReportFilter,
    bucket: Union[str, BucketSize] = BucketSize.WEEK,
) -> tuple[TimeSeriesPoint, ...]:
    """Build an ascending trend series for the filtered entries.

    Buckets without activity are not filled in; gap filling is left to the
    presentation layer.
    """
    return CategoryAggregator(entries, report_filter).by_bucket(parse_bucket(bucket))
