"""UTC timestamp helpers shared by the planner and the convertors."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def to_rfc3339(dt: datetime) -> str:
    """Format *dt* as an RFC-3339 string in UTC with a ``Z`` suffix.

    Naive datetimes are taken to be UTC already.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def lead_time_minutes(start: datetime | None, end: datetime | None) -> int | None:
    """Whole minutes from *start* to *end*, or None when *end* is unset.

    A missing *start* also yields None.  Mixed naive/aware inputs are
    compared as UTC.
    """
    if end is None or start is None:
        return None
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start if start.tzinfo else start.replace(tzinfo=UTC)
        end = end if end.tzinfo else end.replace(tzinfo=UTC)
    return int((end - start).total_seconds() / 60)
