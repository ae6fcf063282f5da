"""
Date and instant parsing for the Observer engine.

One convention everywhere: timestamps are compared as UTC instants,
naive timestamps are taken to be UTC, and date-only strings (YYYY-MM-DD)
mean UTC midnight of that day. Weekday indices follow the Sunday = 0 ...
Saturday = 6 numbering used by the activity summaries.

No other module should parse dates for signature or overlap purposes.
"""

from datetime import UTC, date, datetime


def parse_instant(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Returns None when the value is missing or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def parse_day(value: str | None) -> datetime | None:
    """Parse a YYYY-MM-DD string as UTC midnight of that day."""
    if not value:
        return None
    try:
        day = date.fromisoformat(value.strip())
    except ValueError:
        return None
    return datetime(day.year, day.month, day.day, tzinfo=UTC)


def weekday_index(value: str | None) -> int | None:
    """Weekday of a YYYY-MM-DD string at UTC midnight, Sunday = 0."""
    midnight = parse_day(value)
    if midnight is None:
        return None
    return midnight.isoweekday() % 7


def utc_day_key(instant: datetime) -> str:
    """YYYY-MM-DD key of the UTC calendar day containing an instant."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC).date().isoformat()
