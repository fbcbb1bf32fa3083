"""Whole-day recency of a posting relative to a reference instant."""

from datetime import datetime, timezone

from src.core.errors import FutureDateError

DATE_FORMAT = "%d/%m/%Y"
_SECONDS_PER_DAY = 86_400


def parse_posting_date(date_posted: str) -> datetime:
    """Parse a ``DD/MM/YYYY`` posting date as midnight UTC.

    Raises:
        ValueError: The string is not a valid ``DD/MM/YYYY`` date.
    """
    try:
        parsed = datetime.strptime(date_posted.strip(), DATE_FORMAT)
    except ValueError as e:
        msg = f"Invalid posting date {date_posted!r}, expected DD/MM/YYYY"
        raise ValueError(msg) from e
    return parsed.replace(tzinfo=timezone.utc)


def days_ago(date_posted: str, now: datetime | None = None) -> int:
    """Whole days elapsed between the posting date and ``now``.

    Naive ``now`` values are taken as UTC.

    Raises:
        FutureDateError: The posting date is after ``now``.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = (now - parse_posting_date(date_posted)).total_seconds()
    if elapsed < 0:
        raise FutureDateError(date_posted)
    return int(elapsed // _SECONDS_PER_DAY)


def format_days_ago(days: int) -> str:
    """Human-readable recency, e.g. ``"2 Days ago"``."""
    return f"{days} Days ago"
