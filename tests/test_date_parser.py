"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from finsight.utils.date_parser import (
    get_date_range,
    month_key,
    month_range,
    parse_date,
    previous_month_range,
)

# A Wednesday
TODAY = date(2024, 3, 13)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_today_defaults_to_current_date():
    assert parse_date("today") == date.today()


@pytest.mark.parametrize(
    "text,expected",
    [
        ("today", date(2024, 3, 13)),
        ("yesterday", date(2024, 3, 12)),
        ("tomorrow", date(2024, 3, 14)),
        ("last month", date(2024, 2, 1)),
        ("last year", date(2023, 1, 1)),
        ("last week", date(2024, 3, 4)),
        ("this month", date(2024, 3, 1)),
        ("this year", date(2024, 1, 1)),
        ("this week", date(2024, 3, 11)),
        ("last monday", date(2024, 3, 11)),
        ("last wednesday", date(2024, 3, 6)),
    ],
)
def test_parse_relative_dates(text, expected):
    """Relative forms resolve against the reference date."""
    assert parse_date(text, today=TODAY) == expected


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


@pytest.mark.parametrize(
    "period,expected",
    [
        ("this-month", (date(2024, 3, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("this-week", (date(2024, 3, 11), TODAY)),
        ("last-month", (date(2024, 2, 1), date(2024, 2, 29))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
        ("last-week", (date(2024, 3, 4), date(2024, 3, 10))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")


def test_last_month_across_year_boundary():
    assert get_date_range("last-month", today=date(2024, 1, 10)) == (
        date(2023, 12, 1),
        date(2023, 12, 31),
    )


def test_month_ranges():
    assert month_range(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert previous_month_range(date(2024, 3, 31)) == (date(2024, 2, 1), date(2024, 2, 29))


def test_month_key():
    assert month_key(date(2024, 1, 31)) == "2024-01"


def test_first_of_month_window_is_single_day():
    start, end = get_date_range("this-month", today=date(2024, 5, 1))
    assert start == end == date(2024, 5, 1)
    assert (end - start) == timedelta(0)
