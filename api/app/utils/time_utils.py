"""
Time utility functions.
"""
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def add_days(moment: datetime, days: int) -> datetime:
    """Return moment shifted by a whole number of days."""
    return moment + timedelta(days=days)
