"""Immutable request filter shared by every core operation."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from finrecon.domain import errors
from finrecon.domain.categories import category_key, clean_label, is_all_categories
from finrecon.domain.entities import AtomicEntry, FilterType
from finrecon.utils.date_parser import to_calendar_date


def parse_filter_type(value: Union[str, FilterType, None]) -> FilterType:
    """Coerce a type selector, defaulting to both.

    Raises:
        ValidationError: If the value is not expense, income or both
    """
    if value is None:
        return FilterType.BOTH
    if isinstance(value, FilterType):
        return value
    try:
        return FilterType(str(value).strip().lower())
    except ValueError:
        raise errors.ValidationError(
            errors.invalid_choice("type", value, [t.value for t in FilterType])
        )


def _check_bound(field: str, value: object) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, date):
        raise errors.ValidationError(errors.invalid_date_bound(field, value))
    return to_calendar_date(value)


@dataclass(frozen=True)
class ReportFilter:
    """Date range, category and type selection for one request.

    Dates are inclusive calendar dates; either bound may be open. A category
    of None or "All" means unfiltered. Construction validates the filter and
    normalizes its values, so every instance is known to be well formed.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    category: Optional[str] = None
    type: FilterType = FilterType.BOTH

    def __post_init__(self):
        start = _check_bound("Start date", self.start_date)
        end = _check_bound("End date", self.end_date)
        if start is not None and end is not None and end < start:
            raise errors.ValidationError(errors.end_before_start(start, end))

        if self.category is not None and not isinstance(self.category, str):
            raise errors.ValidationError(errors.invalid_category(self.category))
        category = None if is_all_categories(self.category) else clean_label(self.category)

        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "type", parse_filter_type(self.type))

    @classmethod
    def create(
        cls,
        start_date: Union[date, datetime, None] = None,
        end_date: Union[date, datetime, None] = None,
        category: Optional[str] = None,
        type: Union[str, FilterType, None] = None,
    ) -> "ReportFilter":
        """Build a filter from loosely typed request values."""
        return cls(
            start_date=start_date,
            end_date=end_date,
            category=category,
            type=parse_filter_type(type),
        )

    @property
    def category_key(self) -> Optional[str]:
        """Canonical key of the category filter, or None when unfiltered."""
        if self.category is None:
            return None
        return category_key(self.category)

    def contains_date(self, value: date) -> bool:
        """Check whether a calendar date lies within the inclusive range."""
        value = to_calendar_date(value)
        if self.start_date is not None and value < self.start_date:
            return False
        if self.end_date is not None and value > self.end_date:
            return False
        return True

    def matches_category(self, key: str) -> bool:
        """Check whether a canonical category key passes the filter."""
        return self.category is None or key == self.category_key

    def matches(self, entry: AtomicEntry) -> bool:
        """Check whether an atomic entry passes every part of the filter."""
        return (
            entry.type in self.type.transaction_types
            and self.contains_date(entry.date)
            and self.matches_category(entry.category_key)
        )
