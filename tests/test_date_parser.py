"""Tests for date parsing and calendar bucketing helpers."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from finrecon.utils.date_parser import (
    PERIODS,
    get_date_range,
    month_start,
    parse_date,
    quarter_start,
    to_calendar_date,
    week_start,
)


def test_parse_absolute_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_standard_formats():
    """Formats handled by dateutil."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_parse_relative_days():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date(" Yesterday ") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)


def test_parse_this_and_last_periods():
    today = date.today()
    assert parse_date("this month") == date(today.year, today.month, 1)
    assert parse_date("last month") == (today - relativedelta(months=1)).replace(day=1)
    assert parse_date("this year") == date(today.year, 1, 1)
    assert parse_date("last year") == date(today.year - 1, 1, 1)
    assert parse_date("this week").weekday() == 0
    assert parse_date("last week") == parse_date("this week") - timedelta(days=7)


def test_parse_quarters():
    today = date.today()
    this_quarter = parse_date("this quarter")
    assert this_quarter == quarter_start(today)
    assert parse_date("last quarter") == this_quarter - relativedelta(months=3)


def test_parse_last_weekday_is_in_the_past():
    result = parse_date("last friday")
    assert result.weekday() == 4
    assert 1 <= (date.today() - result).days <= 7


def test_parse_invalid_relative():
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_week_start_is_monday():
    # 2024-01-17 is a Wednesday
    assert week_start(date(2024, 1, 17)) == date(2024, 1, 15)
    assert week_start(date(2024, 1, 15)) == date(2024, 1, 15)
    assert week_start(date(2024, 1, 21)) == date(2024, 1, 15)


def test_week_start_crosses_year_boundary():
    # 2025-01-01 is a Wednesday; its week starts in 2024
    assert week_start(date(2025, 1, 1)) == date(2024, 12, 30)


def test_month_and_quarter_start():
    assert month_start(date(2024, 2, 29)) == date(2024, 2, 1)
    assert quarter_start(date(2024, 2, 29)) == date(2024, 1, 1)
    assert quarter_start(date(2024, 6, 30)) == date(2024, 4, 1)
    assert quarter_start(date(2024, 12, 31)) == date(2024, 10, 1)


def test_to_calendar_date_drops_time():
    assert to_calendar_date(datetime(2024, 3, 5, 23, 59)) == date(2024, 3, 5)
    assert to_calendar_date(date(2024, 3, 5)) == date(2024, 3, 5)


def test_get_date_range_this_periods_end_today():
    today = date.today()
    for period in ("this-week", "this-month", "this-quarter", "this-year"):
        start, end = get_date_range(period)
        assert end == today
        assert start <= end


def test_get_date_range_last_month():
    today = date.today()
    start, end = get_date_range("last-month")
    assert start == (today - relativedelta(months=1)).replace(day=1)
    assert end == today.replace(day=1) - timedelta(days=1)


def test_get_date_range_last_week_is_monday_to_sunday():
    start, end = get_date_range("last-week")
    assert start.weekday() == 0
    assert end.weekday() == 6
    assert (end - start).days == 6


def test_get_date_range_last_quarter_is_whole_quarter():
    start, end = get_date_range("last-quarter")
    assert start == quarter_start(start)
    assert end + timedelta(days=1) == quarter_start(date.today())
    assert end.month - start.month == 2


def test_get_date_range_last_year():
    today = date.today()
    assert get_date_range("last-year") == (date(today.year - 1, 1, 1), date(today.year - 1, 12, 31))


def test_every_period_resolves():
    for period in PERIODS:
        start, end = get_date_range(period)
        assert start <= end


def test_get_date_range_invalid_period():
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")
