"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, UTC
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_datetime(value: str) -> datetime:
    """Parse a date or datetime string into a datetime.

    Supports various formats including a few relative words:
    - Absolute values: "2024-01-15", "January 15, 2024", "2024-01-15T09:30", etc.
    - Relative dates: "now", "today", "yesterday", "tomorrow" (midnight for the
      date-only words)

    Args:
        value: Date or datetime string in various formats

    Returns:
        Datetime object

    Raises:
        ValueError: If the string cannot be parsed
    """
    value = value.strip().lower()
    today = date.today()

    if value == "now":
        return datetime.now(UTC)

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if value in relative_dates:
        return datetime.combine(relative_dates[value], time.min)

    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value}': {e}")


def days_ago(days: int, now: datetime | None = None) -> datetime:
    """Return the instant ``days`` days before ``now`` (default: current UTC time)."""
    if now is None:
        now = datetime.now(UTC)
    return now - relativedelta(days=days)
