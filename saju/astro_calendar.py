"""
Calendar utilities for pillar calculations.
Handles whole-day offsets from the pillar epoch and "today"
resolution, optionally in the local timezone of a location.
"""

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import swisseph as swe
from timezonefinder import TimezoneFinder

# Day pillars count whole calendar days from this date (proleptic Gregorian).
EPOCH = (1900, 1, 1)

_EPOCH_JD = swe.julday(*EPOCH, 0.0)
_tf: Optional[TimezoneFinder] = None


def days_since_epoch(year: int, month: int, day: int) -> int:
    """
    Whole days between 1900-01-01 and the given date.

    Negative for earlier dates. No time-of-day component and no range
    checks: swe.julday extrapolates out-of-range months and days
    arithmetically instead of raising.
    """
    jd = swe.julday(year, month, day, 0.0)
    return round(jd - _EPOCH_JD)


def today() -> date:
    """Current date on the host clock."""
    return datetime.now().date()


def timezone_for(latitude: float, longitude: float) -> str:
    """IANA timezone name for a coordinate pair."""
    global _tf
    if _tf is None:
        _tf = TimezoneFinder()
    tz_name = _tf.timezone_at(lat=latitude, lng=longitude)
    if tz_name is None:
        raise ValueError(f"Could not determine timezone for ({latitude}, {longitude})")
    return tz_name


def local_today(latitude: float, longitude: float,
                now: Optional[datetime] = None) -> date:
    """
    Calendar date at a location.

    Args:
        latitude, longitude: location in degrees (north/east positive)
        now: aware datetime to convert; defaults to the current UTC instant
    """
    tz = ZoneInfo(timezone_for(latitude, longitude))
    if now is None:
        return datetime.now(tz).date()
    return now.astimezone(tz).date()
