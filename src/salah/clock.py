"""Clock-time conversion: fractional hours, timezone offsets, and date strings."""

import logging
import math
from datetime import date, datetime, time

from pytz import UnknownTimeZoneError, timezone
from pytz.tzinfo import BaseTzInfo

from salah.errors import ParseError, TimeRangeError

log = logging.getLogger(__name__)


def hour_to_time(hour: float, round_seconds: bool = False) -> time:
    """Convert a fractional hour of the day (0-24) to a clock time.

    Args:
        hour: Fractional hour, e.g. 17.4 for 17:24.
        round_seconds: If True, seconds >= 30 round the minute up and seconds are dropped.

    Returns:
        datetime.time

    Raises:
        TimeRangeError: If the hour is not finite or does not fall on a valid clock time.
    """
    if not math.isfinite(hour):
        raise TimeRangeError(f"Cannot convert hour = {hour} to a time")

    h = math.trunc(hour)
    minutes = (hour - h) * 60.0
    m = math.trunc(minutes)
    s = round((minutes - m) * 60.0)

    if round_seconds:
        if s >= 30:
            m += 1
        s = 0

    if s >= 60:
        s -= 60
        m += 1
    if m >= 60:
        m -= 60
        h += 1
    if h == 24:
        h = 0

    try:
        return time(h, m, s)
    except ValueError as e:
        raise TimeRangeError(
            f"Cannot create time with hour = {h}, minute = {m}, second = {s}"
        ) from e


def time_to_hour(t: time) -> float:
    """Fractional hour of a clock time. Inverse of hour_to_time()."""
    return t.hour + (t.minute + t.second / 60.0) / 60.0


def load_timezone(name: str) -> BaseTzInfo:
    """Look up an IANA timezone by name.

    Raises:
        ParseError: If the name is not in the timezone database.
    """
    try:
        return timezone(name)
    except UnknownTimeZoneError as e:
        raise ParseError(f"Unknown timezone: {name}") from e


def timezone_offset(tz: BaseTzInfo, day: date) -> float:
    """UTC offset of `tz` in hours, taken at local noon of `day`.

    Noon keeps clear of the early-morning daylight-saving transitions.
    """
    local_dt = tz.localize(datetime.combine(day, time(12)), is_dst=False)
    offset = local_dt.utcoffset()
    assert offset is not None
    hours = offset.total_seconds() / 3600.0
    log.debug("UTC offset of %s on %s: %+.2f h", tz.zone, day, hours)
    return hours


def today(tz: BaseTzInfo) -> date:
    """Current calendar date in `tz`."""
    return datetime.now(tz).date()


def date_from_string(value: str, tz: BaseTzInfo) -> date:
    """Parse "YYYY-MM-DD", or "today" for the current date in `tz`.

    Raises:
        ParseError: On a malformed string or an impossible calendar date.
    """
    if value.strip().lower() == "today":
        return today(tz)

    parts = value.strip().split("-")
    if len(parts) != 3:
        raise ParseError(f"date must be YYYY-MM-DD, got `{value}`")
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError as e:
        raise ParseError(f"date must be YYYY-MM-DD, got `{value}`") from e
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ParseError(f"Invalid date `{value}`: {e}") from e
