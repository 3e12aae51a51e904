"""Elapsed-time calculation for onboarding issues."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sandbox_onboarding.progress.models import AgeInfo


DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

_ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def calculate_age(created_at: datetime, now: Optional[datetime] = None) -> AgeInfo:
    """Compute the age of an issue in whole days, weeks and months.

    Days are floored from the elapsed time; weeks and months are floored
    from days using a fixed 30-day month. A creation time in the future
    yields negative values rather than an error.

    Args:
        created_at: When the issue was opened.
        now: Reference time. Defaults to the current UTC time.

    Returns:
        AgeInfo for the elapsed interval.
    """
    if now is None:
        now = utc_now()

    days = (now - created_at) // _ONE_DAY
    return AgeInfo(
        days=days,
        weeks=days // DAYS_PER_WEEK,
        months=days // DAYS_PER_MONTH,
    )
