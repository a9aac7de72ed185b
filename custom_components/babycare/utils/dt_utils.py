# File: utils/dt_utils.py
"""Date and time utilities for BabyCare.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

Functions:
    - dt_today_local: Get today's date in local timezone
    - dt_now_local: Get current datetime in local timezone
    - dt_now_utc: Get current datetime in UTC
    - as_utc / as_local: Timezone conversion
    - start_of_local_day: Local midnight for a datetime
    - dt_parse_date: Parse date strings
    - dt_parse: Normalize datetime inputs
    - dt_to_utc: Parse and convert to UTC
    - dt_to_iso_utc: Serialize a datetime for storage
    - dt_format: Format datetime to various output types
    - dt_add_interval: Calendar-aware interval arithmetic
    - dt_minutes_ago: Current time shifted back by N minutes
    - dt_format_duration: Format seconds as "Xh Ym"
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from typing import TYPE_CHECKING, cast
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

# Time unit constants
TIME_UNIT_MINUTES = "minutes"
TIME_UNIT_HOURS = "hours"
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"
TIME_UNIT_YEARS = "years"

# Return type constants
HELPER_RETURN_DATETIME = "datetime"
HELPER_RETURN_DATETIME_UTC = "datetime_utc"
HELPER_RETURN_DATETIME_LOCAL = "datetime_local"
HELPER_RETURN_DATE = "date"
HELPER_RETURN_ISO_DATETIME = "iso_datetime"
HELPER_RETURN_ISO_DATE = "iso_date"


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone.

    Returns:
        The configured default timezone (ZoneInfo object)
    """
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_now_local(tz: ZoneInfo | None = None) -> datetime:
    """Return the current datetime in local timezone (timezone-aware).

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Current datetime in the specified timezone.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info)


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_minutes_ago(minutes: int, now: datetime | None = None) -> datetime:
    """Return `now` shifted back by a number of minutes (UTC-aware).

    Args:
        minutes: Minutes to subtract (0 returns now)
        now: Optional reference time, defaults to the current UTC time

    Example:
        dt_minutes_ago(15) → 15 minutes before now
    """
    reference = as_utc(now) if now is not None else dt_now_utc()
    return reference - timedelta(minutes=max(minutes, 0))


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Args:
        dt_obj: Datetime object (naive values are assumed local)

    Returns:
        Datetime in UTC timezone
    """
    if dt_obj.tzinfo is None:
        # Assume it's in default timezone if naive
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object (naive values are assumed local)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime in local timezone
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        return dt_obj.replace(tzinfo=tz_info)
    return dt_obj.astimezone(tz_info)


def start_of_local_day(
    dt_obj: datetime | date, tz: ZoneInfo | None = None
) -> datetime:
    """Get the start of day (00:00:00) for a datetime in local timezone.

    DST-safe implementation: the local wall-clock midnight is rebuilt from
    the calendar date so the UTC offset is recomputed for that instant.

    Args:
        dt_obj: Datetime (any timezone) or plain date
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Datetime at 00:00:00 in local timezone (timezone-aware)
    """
    tz_info = tz or DEFAULT_TIME_ZONE

    if isinstance(dt_obj, datetime):
        local_date = as_local(dt_obj, tz_info).date()
    else:
        local_date = dt_obj

    return datetime(local_date.year, local_date.month, local_date.day, tzinfo=tz_info)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Safely parse a date string into a `datetime.date`.

    Accepts formats:
    - "2025-04-07" (ISO format)
    - "04/07/2025" (US format)
    - "2025/04/07"

    Args:
        date_str: Date string to parse, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if not date_str or not isinstance(date_str, str):
        return None

    try:
        return date.fromisoformat(date_str)
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%Y/%m/%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue

    return None


def dt_parse(
    dt_input: str | date | datetime | None,
    default_tzinfo: tzinfo | None = None,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str | None:
    """Normalize various datetime input formats to a consistent format.

    Args:
        dt_input: String, date or datetime to normalize, or None
        default_tzinfo: Timezone to use if the input is naive
                        (defaults to DEFAULT_TIME_ZONE if None)
        return_type: One of the HELPER_RETURN_* constants

    Returns:
        Normalized datetime, date, or string based on return_type, or None if
        the input could not be parsed.

    Example:
        >>> dt_parse("2026-01-02T07:00:00", return_type=HELPER_RETURN_ISO_DATETIME)
        '2026-01-02T07:00:00+00:00'
    """
    if not dt_input:
        return None

    tz_info = default_tzinfo or DEFAULT_TIME_ZONE
    result: datetime | None = None

    if isinstance(dt_input, str):
        try:
            result = datetime.fromisoformat(dt_input)
        except ValueError:
            parsed_date = dt_parse_date(dt_input)
            if parsed_date:
                result = datetime.combine(parsed_date, datetime.min.time())
            else:
                _LOGGER.debug("DEBUG: Unable to parse datetime '%s'", dt_input)
                return None

    elif isinstance(dt_input, datetime):
        result = dt_input

    elif isinstance(dt_input, date):
        result = datetime.combine(dt_input, datetime.min.time())

    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=tz_info)

    return dt_format(result, return_type)


def dt_to_utc(dt_input: str | datetime | None) -> datetime | None:
    """Parse a datetime (string or object), apply timezone if naive, convert to UTC.

    Args:
        dt_input: Datetime string or object, or None

    Returns:
        UTC-aware datetime object, or None if parsing fails.

    Example:
        "2026-01-02T07:00:00+01:00" → datetime(2026, 1, 2, 6, 0, tzinfo=UTC)
    """
    if not dt_input:
        return None

    result = dt_parse(
        dt_input,
        default_tzinfo=DEFAULT_TIME_ZONE,
        return_type=HELPER_RETURN_DATETIME_UTC,
    )
    return cast("datetime | None", result)


def dt_to_iso_utc(dt_input: str | datetime | None) -> str | None:
    """Serialize a datetime as a UTC ISO-8601 string for storage.

    Returns None for empty or unparseable input.
    """
    parsed = dt_to_utc(dt_input)
    return parsed.isoformat() if parsed else None


# ==============================================================================
# Date/Time Formatting
# ==============================================================================


def dt_format(
    dt_obj: datetime,
    return_type: str | None = HELPER_RETURN_DATETIME,
) -> datetime | date | str:
    """Format a datetime object according to the specified return_type.

    Args:
        dt_obj: The datetime object to format
        return_type: The desired return format (HELPER_RETURN_* constant)

    Returns:
        The formatted date/time value
    """
    if return_type == HELPER_RETURN_DATETIME:
        return dt_obj
    if return_type == HELPER_RETURN_DATETIME_UTC:
        return as_utc(dt_obj)
    if return_type == HELPER_RETURN_DATETIME_LOCAL:
        return as_local(dt_obj)
    if return_type == HELPER_RETURN_DATE:
        return dt_obj.date()
    if return_type == HELPER_RETURN_ISO_DATETIME:
        return dt_obj.isoformat()
    if return_type == HELPER_RETURN_ISO_DATE:
        return dt_obj.date().isoformat()
    return dt_obj


def dt_format_duration(seconds: float | None) -> str:
    """Format a duration in seconds as a compact hours/minutes string.

    Args:
        seconds: Duration in seconds, or None

    Returns:
        "Xh Ym" when at least one hour, otherwise "Ym".

    Examples:
        dt_format_duration(28800) → "8h 0m"
        dt_format_duration(1500) → "25m"
        dt_format_duration(None) → "0m"
    """
    if not seconds or seconds <= 0:
        return "0m"

    total_minutes = int(seconds) // 60
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


# ==============================================================================
# Interval Arithmetic
# ==============================================================================


def dt_add_interval(
    base: datetime,
    interval_unit: str,
    delta: int,
) -> datetime:
    """Add a whole number of calendar units to a datetime.

    Months and years use `relativedelta`, so the day of month is clamped
    to the target month length instead of overflowing.

    Args:
        base: Starting datetime (aware or naive)
        interval_unit: One of the TIME_UNIT_* constants
        delta: Number of units to add (negative to subtract)

    Returns:
        The shifted datetime, keeping the wall-clock time of `base`.

    Raises:
        ValueError: Unknown interval unit.
        OverflowError: The result falls outside the supported datetime range.

    Examples:
        dt_add_interval(datetime(2026, 1, 31), TIME_UNIT_MONTHS, 1) → 2026-02-28
        dt_add_interval(datetime(2024, 2, 29), TIME_UNIT_YEARS, 1) → 2025-02-28
    """
    if interval_unit == TIME_UNIT_MINUTES:
        return base + timedelta(minutes=delta)
    if interval_unit == TIME_UNIT_HOURS:
        return base + timedelta(hours=delta)
    if interval_unit == TIME_UNIT_DAYS:
        return base + relativedelta(days=delta)
    if interval_unit == TIME_UNIT_WEEKS:
        return base + relativedelta(weeks=delta)
    if interval_unit == TIME_UNIT_MONTHS:
        return base + relativedelta(months=delta)
    if interval_unit == TIME_UNIT_YEARS:
        return base + relativedelta(years=delta)

    raise ValueError(f"Unsupported interval unit: {interval_unit}")
