"""
Locale-aware date formatting.

Content stores calendar days (a job's start date, a degree's graduation date)
as midnight UTC. Displayed as an instant, such a value lands on the previous
day anywhere west of Greenwich, so any value whose UTC time fields are all
zero is treated as a calendar day and pinned to local midnight of that same
day before formatting. Values with a time of day are real instants and are
shown in the render's timezone.

Examples:
    >>> format_date(datetime(2024, 3, 15, tzinfo=timezone.utc), context)  # dd/MM/yyyy, es
    '15/03/2024'
    >>> format_date("2024-03-15", context)
    '15/03/2024'
"""

from datetime import date, datetime, timezone, tzinfo
from typing import Union

from babel.dates import format_datetime

from vitae.contexts.rendering.render_context import PageRender, RenderContext, get_global_context

DateValue = Union[date, datetime, str]


def _coerce(value: DateValue) -> Union[date, datetime]:
    """Parse ISO strings and pin naive datetimes to UTC."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())

    if isinstance(value, datetime):
        return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return value

    raise TypeError(f"Expected a date, datetime or ISO 8601 string, got {type(value).__name__}")


def is_midnight_utc(value: DateValue) -> bool:
    """
    Whether a value represents a calendar day rather than an instant.

    Plain dates always do. Datetimes do when their UTC hour, minute, second
    and microsecond are all zero (naive datetimes are read as UTC).
    """
    value = _coerce(value)
    if not isinstance(value, datetime):
        return True

    utc = value.astimezone(timezone.utc)
    return utc.hour == 0 and utc.minute == 0 and utc.second == 0 and utc.microsecond == 0


def normalize_date_only(value: DateValue, tz: tzinfo = None) -> datetime:
    """
    Re-anchor date-only values to local midnight of their UTC calendar day.

    Without `tz` the host zone applies, with the UTC offset in force on the
    value's own date rather than today's.

    Args:
        value: Date, datetime, or ISO 8601 string
        tz: Zone to anchor to (None for the host's local zone)

    Returns:
        New timezone-aware datetime in `tz`. Date-only values keep their UTC
        year/month/day; instants keep their moment in time.
    """
    value = _coerce(value)

    if isinstance(value, datetime) and not is_midnight_utc(value):
        return value.astimezone(tz)

    if isinstance(value, datetime):
        value = value.astimezone(timezone.utc)

    if tz is None:
        return datetime(value.year, value.month, value.day).astimezone()
    return datetime(value.year, value.month, value.day, tzinfo=tz)


def format_date(value: DateValue, context: RenderContext) -> str:
    """
    Format a date with the render's locale and date format.

    Args:
        value: Date, datetime, or ISO 8601 string
        context: Render context supplying locale, date_format and timezone

    Returns:
        Formatted date string

    Raises:
        ValueError: If a string value is not ISO 8601
        TypeError: If the value is not a date at all
    """
    moment = normalize_date_only(value, context.timezone)
    return format_datetime(moment, context.date_format, tzinfo=moment.tzinfo, locale=context.locale)


def format_date_for(value: DateValue, page: PageRender) -> str:
    """Format a date with the RenderContext attached to a page render."""
    return format_date(value, get_global_context(page))
