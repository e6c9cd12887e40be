"""
Date Display

DESIGN DECISION: format_date NEVER raises. Dates come from the server, from
user input and from half-filled forms; a bad one must render as a readable
sentinel, not take down the screen that shows it.

Parsing rules:
1. Missing or blank input -> DATE_NOT_SET
2. ISO 8601 date-time, then a retry as local midnight for date-only strings
3. Anything else -> INVALID_DATE (logged as a warning)

Date-only strings ('2024-03-15') are calendar dates, not instants. They are
never shifted through UTC, so '2024-03-15' shows as March 15 everywhere.
Timestamps with an offset are converted to the display timezone first.
"""

from datetime import date, datetime, tzinfo
from typing import Optional

from babel.dates import format_date as babel_format_date

from finance_tracker.config import get_settings
from finance_tracker.diagnostics import get_logger


DATE_NOT_SET = "Date not set"
INVALID_DATE = "Invalid date"

# babel's "long" date in en_US is "March 15, 2024": full month, day, year
DEFAULT_DATE_FORMAT = "long"

logger = get_logger(__name__)


def parse_date_value(value: str) -> Optional[datetime]:
    """
    Parse an ISO date or date-time string.

    Returns None when the value cannot be read as a date. A value without a
    time component is retried as local midnight.
    """
    text = value.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        if "T" in text:
            return None

    try:
        return datetime.fromisoformat(f"{text}T00:00:00")
    except ValueError:
        return None


def to_calendar_date(parsed: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of a parsed value, converting aware values into tz."""
    if parsed.tzinfo is not None:
        if tz is None:
            tz = get_settings().formatting.tzinfo
        parsed = parsed.astimezone(tz)
    return parsed.date()


def format_date(
    value: Optional[str],
    format: str = DEFAULT_DATE_FORMAT,
    locale: Optional[str] = None,
    tzinfo: Optional[tzinfo] = None,
) -> str:
    """
    Format a date string for display.

    Args:
        value: ISO date ('2024-03-15') or date-time ('2024-03-15T10:00:00Z')
        format: babel width ('short', 'medium', 'long', 'full') or a CLDR
                pattern such as 'MMM y'
        locale: Babel locale. Defaults to FINANCE_FORMAT_LOCALE.
        tzinfo: Display timezone for values carrying an offset.

    Returns:
        The localized date, DATE_NOT_SET or INVALID_DATE.

    Example:
        >>> format_date("2024-03-15", locale="en_US")
        'March 15, 2024'
    """
    if value is None or not str(value).strip():
        return DATE_NOT_SET

    try:
        parsed = parse_date_value(str(value))
        if parsed is None:
            logger.warning("invalid_date", value=value)
            return INVALID_DATE

        calendar_date = to_calendar_date(parsed, tzinfo)
        return babel_format_date(
            calendar_date,
            format=format,
            locale=locale or get_settings().formatting.locale,
        )
    except Exception as e:
        logger.error(
            "date_format_failed",
            value=value,
            error=str(e),
            error_type=type(e).__name__,
        )
        return INVALID_DATE
