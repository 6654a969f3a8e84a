"""Core utilities and shared functionality."""

from cashflow.core.clock import (
    now_utc,
    today_utc,
    to_utc,
    parse_date,
    month_bounds,
    one_month_from,
    UTC_TZ,
)
from cashflow.core.exceptions import (
    AppError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
    ConcurrencyConflictError,
)

__all__ = [
    "now_utc",
    "today_utc",
    "to_utc",
    "parse_date",
    "month_bounds",
    "one_month_from",
    "UTC_TZ",
    "AppError",
    "InvalidArgumentError",
    "NotFoundError",
    "StoreUnavailableError",
    "ConcurrencyConflictError",
]
