"""Timezone and calendar-date utilities (US/Eastern market time)."""

from datetime import date, datetime
from typing import Any

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")

MIN_YEAR = 1970


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return today's calendar date in US/Eastern timezone."""
    return now_eastern().date()


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def normalize_date(value: Any) -> date:
    """
    Coerce a loosely formatted date into a calendar date.

    Accepts date/datetime objects or strings understood by dateutil.
    Missing, unparseable or out-of-range input falls back to today (US/Eastern).
    """
    today = today_eastern()

    if isinstance(value, datetime):
        parsed = to_eastern(value).date() if value.tzinfo else value.date()
    elif isinstance(value, date):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value.strip()).date()
        except (ValueError, OverflowError):
            return today
    else:
        return today

    if parsed.year < MIN_YEAR or parsed.year > today.year + 1:
        return today
    return parsed
