"""UTC and home-relative offset strings."""
from datetime import datetime
from typing import Optional

from worldclock.core.schemas import LocationRecord
from worldclock.core.time_utils import resolve_local_time


def _hours_minutes(offset_minutes: int) -> str:
    """'5', '5:30' for 300 and 330 minutes. Hours truncate toward zero, minutes stay positive."""
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{hours}:{minutes:02d}" if minutes else f"{hours}"


def format_utc_offset(offset_minutes: int) -> str:
    """UTC+0, UTC-6, UTC+5:30"""
    sign = "-" if offset_minutes < 0 else "+"
    return f"UTC{sign}{_hours_minutes(offset_minutes)}"


def format_relative_offset(target_minutes: int, home_minutes: int) -> str:
    """Offset of target from home: +5:30, -5:30, +0 for the same offset.

    The hour part truncates toward zero and carries the sign, so a
    difference under an hour in either direction renders as +0:MM.
    """
    difference = target_minutes - home_minutes
    hours = int(difference / 60)
    minutes = abs(difference) % 60
    return f"{hours:+d}:{minutes:02d}" if minutes else f"{hours:+d}"


def format_offset(
    record: LocationRecord,
    instant: datetime,
    home: Optional[LocationRecord] = None,
) -> str:
    """Relative to the home city when one is set, to UTC otherwise."""
    target = resolve_local_time(instant, record.timezone).utc_offset_minutes
    if home is None:
        return format_utc_offset(target)
    return format_relative_offset(target, resolve_local_time(instant, home.timezone).utc_offset_minutes)
