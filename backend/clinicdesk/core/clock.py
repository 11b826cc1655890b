"""Business-day clock. Sale timestamps are UTC, so "today" is the UTC date everywhere."""
from datetime import date, datetime, timezone


def utc_today() -> date:
    return datetime.now(timezone.utc).date()
