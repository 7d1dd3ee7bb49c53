"""Turn a report-period selector into a concrete ``DateRange``."""

from datetime import date, timedelta
from typing import Optional, Union

from .exceptions import InvalidDateRangeError
from .models import DateRange

PERIODS = ("day", "week", "month", "all", "custom")

# Start of the "all" window; git has nothing older.
EPOCH = date(1970, 1, 1)

_PERIOD_ALIASES = {
    "today": "day",
    "daily": "day",
    "weekly": "week",
    "monthly": "month",
    "all-time": "all",
    "alltime": "all",
}


def parse_date(value: Union[str, date, None], field_name: str) -> Optional[date]:
    """Parse an ISO ``YYYY-MM-DD`` string; ``None`` passes through."""
    if value is None or isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateRangeError(f"{field_name} must be YYYY-MM-DD, got {value!r}")


def normalize_period(period: str) -> str:
    key = period.strip().lower()
    key = _PERIOD_ALIASES.get(key, key)
    if key not in PERIODS:
        raise InvalidDateRangeError(
            f"unknown period {period!r} (choose from: {', '.join(PERIODS)})"
        )
    return key


def resolve_date_range(
    period: str,
    start: Union[str, date, None] = None,
    end: Union[str, date, None] = None,
    *,
    today: date,
) -> DateRange:
    """Compute the inclusive reporting window.

    - ``day``: today only
    - ``week``: trailing 7 days including today
    - ``month``: trailing 30 days including today
    - ``all``: 1970-01-01 through today
    - ``custom``: explicit ``start``/``end`` (both required, ``start <= end``)

    Raises:
        InvalidDateRangeError: for unknown periods or a malformed custom range
    """
    kind = normalize_period(period)

    if kind == "day":
        return DateRange.from_dates(today, today, label=f"Day {today.isoformat()}")
    if kind == "week":
        return DateRange.from_dates(today - timedelta(days=6), today, label="Last 7 days")
    if kind == "month":
        return DateRange.from_dates(today - timedelta(days=29), today, label="Last 30 days")
    if kind == "all":
        return DateRange.from_dates(EPOCH, today, label="All time")

    start_date = parse_date(start, "start")
    end_date = parse_date(end, "end")
    if start_date is None or end_date is None:
        raise InvalidDateRangeError(
            "custom period requires both start and end", start_date, end_date
        )
    if start_date > end_date:
        raise InvalidDateRangeError("start is after end", start_date, end_date)
    return DateRange.from_dates(
        start_date, end_date, label=f"{start_date.isoformat()} to {end_date.isoformat()}"
    )
