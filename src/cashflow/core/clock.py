"""Time utilities. All persisted timestamps use UTC."""

from datetime import date, datetime, timedelta
from typing import Union

import pytz
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

UTC_TZ = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC_TZ)


def today_utc() -> date:
    """Return the current calendar date in UTC."""
    return now_utc().date()


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Naive values coming back from the database are already UTC
        return UTC_TZ.localize(dt)
    return dt.astimezone(UTC_TZ)


def parse_date(value: Union[str, date]) -> date:
    """Parse an ISO-ish date string (time component, if any, is dropped)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.parse(value).date()


def one_month_from(start: date) -> date:
    """Return the last day of the one-month window beginning at ``start``."""
    return start + relativedelta(months=1) - timedelta(days=1)


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last calendar day of the month containing ``day``."""
    start = day.replace(day=1)
    return start, one_month_from(start)
