"""
Instant parsing and formatting helpers.

All instants are handled as timezone-aware UTC datetimes. Stores that drop
the offset on read (SQLite) hand back naive values, which are UTC as well.
"""
from datetime import datetime, timezone


def ensure_utc(value):
    """Return an aware UTC datetime; naive input is taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def isoformat_utc(value):
    """Format as ISO-8601 with millisecond precision and a Z suffix."""
    return ensure_utc(value).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_instant(value):
    """Parse an ISO-8601 string or epoch milliseconds. Returns None if invalid."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if not isinstance(value, str) or not value.strip():
        return None

    try:
        parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        return ensure_utc(parsed)
    except (ValueError, OverflowError):
        # Offsets can push an instant past datetime.min or datetime.max
        return None
