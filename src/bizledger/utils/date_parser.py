"""Date parsing utilities."""

from datetime import date, datetime, UTC

from dateutil import parser as date_parser


def parse_timestamp(value: str | date | datetime) -> datetime:
    """Parse an ISO-8601 date or timestamp into an aware UTC datetime.

    A bare date ("2024-01-01") is midnight UTC of that day, and a timestamp
    without an offset is taken to be UTC.

    Args:
        value: ISO-8601 string, date or datetime

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        try:
            dt = date_parser.isoparse(value.strip())
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse date '{value}': {e}") from e
    else:
        raise ValueError(f"Could not parse date {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    try:
        return dt.astimezone(UTC)
    except OverflowError as e:
        # Offsets at the ends of the calendar shift past year 1 or 9999
        raise ValueError(f"Date {value!r} is out of range in UTC") from e
