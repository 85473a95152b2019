"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from typing import Iterator, Union
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, rrule

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def to_date(value: Union[date, datetime, str]) -> date:
    """Coerce a date, datetime or strict YYYY-MM-DD string to a date.

    Raises:
        ValueError: If a string is not an ISO calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid date '{value}': expected YYYY-MM-DD") from e


def to_date_string(value: date) -> str:
    """Format a date as zero-padded YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every calendar date from start to end, inclusive.

    Nothing is yielded when end is before start.
    """
    if end < start:
        return
    for dt in rrule(DAILY, dtstart=datetime.combine(start, datetime.min.time()),
                    until=datetime.combine(end, datetime.min.time())):
        yield dt.date()


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "tomorrow", "last monday",
      "this week", "last month", etc.

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
        if period == "week":
            return today - timedelta(days=today.weekday() + 7)
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        if period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "week":
            return today - timedelta(days=today.weekday())
        if period == "month":
            return today.replace(day=1)

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of last-7-days, this-week, last-week, this-month, last-month

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "last-7-days":
        return (today - timedelta(days=6), today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        # Day before the first of the current month
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: last-7-days, this-week, "
        "last-week, this-month, last-month"
    )
