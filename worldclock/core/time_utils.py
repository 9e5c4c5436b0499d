"""Timezone-aware time utilities.

Centralizes timezone handling so it's consistent and testable.
Every conversion starts from an aware instant; offset, DST flag and
abbreviation are all read off the same converted datetime so they agree
even right at a DST transition.
"""
import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from worldclock.core.posix_tz import PosixTimezone
from worldclock.core.schemas import LocalTime

# Zones without a letter abbreviation report e.g. "+04" or "-0330"
NUMERIC_ABBREVIATION = re.compile(r"^[+-]\d+$")


class UnknownTimezoneError(ValueError):
    """Identifier is neither an IANA zone nor a POSIX TZ string."""


def get_current_time() -> datetime:
    """Return the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@lru_cache(maxsize=None)
def get_tzinfo(identifier: str) -> tzinfo:
    """Load an IANA zone, falling back to parsing a POSIX TZ string."""
    try:
        return ZoneInfo(identifier)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        pass
    try:
        return PosixTimezone(identifier)
    except ValueError:
        raise UnknownTimezoneError(f"Unknown timezone identifier: {identifier!r}") from None


def resolve_local_time(instant: datetime, timezone_id: str) -> LocalTime:
    """Civic time, UTC offset, DST state and abbreviation of a zone at `instant`."""
    if instant.tzinfo is None:
        raise ValueError("instant must be timezone-aware")

    local = instant.astimezone(get_tzinfo(timezone_id))
    abbreviation = local.tzname()
    if abbreviation and NUMERIC_ABBREVIATION.match(abbreviation):
        abbreviation = None

    return LocalTime(
        local_wall_clock=local,
        utc_offset_minutes=int(local.utcoffset().total_seconds()) // 60,
        # Zones like Europe/Dublin report winter time as a negative DST
        is_dst=local.dst() > timedelta(0),
        abbreviation=abbreviation,
    )
