"""Parsing of the reminder date/time typed by the user."""

import re
from datetime import datetime

import pytz
from dateutil import parser as date_parser

from event_reminder.errors import UnparseableDateTimeError

DATE_FORMAT_HINT = "YYYY-MM-DD HH:mm"

# Full date and hours:minutes; seconds and a UTC offset may follow
_DATE_TIME_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}")


def parse_reminder_text(text: str, tz) -> datetime:
    """
    Parse reminder text such as ``2099-01-01 10:00``.

    Partial input (time only, a weekday, a month, a bare year) is rejected.

    Args:
        text: Date and time as entered by the user
        tz: pytz timezone the entered wall-clock time belongs to

    Returns:
        Timezone-aware datetime in ``tz``

    Raises:
        UnparseableDateTimeError: If the text is not a valid date and time
    """
    text = (text or "").strip()
    if not _DATE_TIME_SHAPE.match(text):
        raise UnparseableDateTimeError()

    try:
        parsed = date_parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise UnparseableDateTimeError() from e

    if parsed.tzinfo is None:
        return tz.localize(parsed)
    return parsed.astimezone(tz)


def get_timezone(name: str):
    """Resolve a timezone name, e.g. 'America/Montreal'."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as e:
        raise ValueError(f"Unknown timezone: {name}") from e
