"""Timestamp and placeholder formatting for dashboard views."""

from datetime import datetime, timezone, tzinfo

PLACEHOLDER = "-"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Timestamps without an offset are taken as UTC.

    Returns:
        Parsed datetime, or None if the value is missing or invalid

    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_local(value: str | None, tz: tzinfo | None) -> datetime | None:
    parsed = parse_timestamp(value)
    if parsed is None:
        return None

    # Instants near year 1 or 9999 can fall outside datetime's range locally
    try:
        return parsed.astimezone(tz)
    except (OverflowError, ValueError):
        return None


def format_table_timestamp(value: str | None, tz: tzinfo | None = None) -> str:
    """Format a timestamp as ``MMM d, yyyy HH:mm:ss`` in local time."""
    local = _to_local(value, tz)
    if local is None:
        return PLACEHOLDER

    return f"{local:%b} {local.day}, {local:%Y %H:%M:%S}"


def format_long_timestamp(value: str | None, tz: tzinfo | None = None) -> str:
    """Format a timestamp as ``MMM d, yyyy, h:mm:ss AM`` in local time."""
    local = _to_local(value, tz)
    if local is None:
        return PLACEHOLDER

    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%b} {local.day}, {local.year}, {hour}:{local:%M:%S} {meridiem}"


def or_placeholder(value: str | None) -> str:
    """Return the value, or the placeholder dash when it is empty."""
    return value if value else PLACEHOLDER
