"""Date parsing and calendar bucketing utilities."""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = (
    "this-week",
    "this-month",
    "this-quarter",
    "this-year",
    "last-week",
    "last-month",
    "last-quarter",
    "last-year",
)


def to_calendar_date(value: Union[date, datetime]) -> date:
    """Drop any time-of-day component from a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def week_start(value: date) -> date:
    """Return the Monday of the ISO week containing a date."""
    return value - timedelta(days=value.weekday())


def month_start(value: date) -> date:
    """Return the first day of the month containing a date."""
    return value.replace(day=1)


def quarter_start(value: date) -> date:
    """Return the first day of the calendar quarter containing a date."""
    return date(value.year, 3 * ((value.month - 1) // 3) + 1, 1)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones ("today", "yesterday", "last month", "this week", "last friday").
    Week-relative values resolve to Mondays; month and year values resolve to
    the first day of the period.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return week_start(today) - timedelta(days=7)
        elif period == "quarter":
            return quarter_start(today) - relativedelta(months=3)
        elif period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7
            if days_ago == 0:
                days_ago = 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return month_start(today)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return week_start(today)
        elif period == "quarter":
            return quarter_start(today)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month, quarter or year.

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-week":
        return (week_start(today), today)
    elif period == "this-month":
        return (month_start(today), today)
    elif period == "this-quarter":
        return (quarter_start(today), today)
    elif period == "this-year":
        return (today.replace(month=1, day=1), today)
    elif period == "last-week":
        start = week_start(today) - timedelta(days=7)
        return (start, start + timedelta(days=6))
    elif period == "last-month":
        end = month_start(today) - timedelta(days=1)
        return (month_start(end), end)
    elif period == "last-quarter":
        end = quarter_start(today) - timedelta(days=1)
        return (quarter_start(end), end)
    elif period == "last-year":
        return (date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
