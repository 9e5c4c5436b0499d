"""Chronological ordering of locations across timezones.

Each location is keyed by its local civic time packed into one integer,
YYYYMMDDHHMM. Comparing those keys orders places by calendar date first,
so a zone that is already on tomorrow sorts after one still on today
without any date line special-casing.
"""
from datetime import datetime
from enum import Enum
from typing import Callable, List, Sequence, Union

from worldclock.core.schemas import LocationRecord
from worldclock.core.time_utils import resolve_local_time

SortFunction = Callable[[Sequence[LocationRecord], datetime], List[LocationRecord]]


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


def chronological_key(record: LocationRecord, instant: datetime) -> int:
    local = resolve_local_time(instant, record.timezone).local_wall_clock
    return (
        local.year * 10**8
        + local.month * 10**6
        + local.day * 10**4
        + local.hour * 100
        + local.minute
    )


def sort_ascending(records: Sequence[LocationRecord], instant: datetime) -> List[LocationRecord]:
    """Earliest local time first. Stable for places on the same minute."""
    return sorted(records, key=lambda record: chronological_key(record, instant))


def sort_descending(records: Sequence[LocationRecord], instant: datetime) -> List[LocationRecord]:
    """Exactly the ascending order, reversed."""
    return list(reversed(sort_ascending(records, instant)))


SORT_FUNCTIONS = {
    SortDirection.ASCENDING: sort_ascending,
    SortDirection.DESCENDING: sort_descending,
}


def get_sort_function(strategy: Union[SortDirection, str, SortFunction]) -> SortFunction:
    """Pick the sort function for a direction name, or pass a custom one through.

    Supported directions:
      - "ascending": earliest local time first (default)
      - "descending": latest local time first
    Custom functions receive the same (records, instant) arguments.
    """
    if callable(strategy):
        return strategy
    try:
        return SORT_FUNCTIONS[SortDirection(strategy)]
    except ValueError:
        raise ValueError(
            f"Unknown sort direction: {strategy!r}. Supported: ascending, descending"
        ) from None


def sort_cities(
    records: Sequence[LocationRecord],
    instant: datetime,
    strategy: Union[SortDirection, str, SortFunction] = SortDirection.ASCENDING,
) -> List[LocationRecord]:
    return list(get_sort_function(strategy)(records, instant))
