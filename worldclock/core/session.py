"""Board session state and the operations the shell drives.

The shell owns one ClockSession and threads it through every call. Each
operation returns an updated copy; the original is left untouched. The
session keeps its home city inside its city list at all times.
"""
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from worldclock.core.config import Settings, get_settings
from worldclock.core.display import format_header, format_rows
from worldclock.core.schemas import LocationRecord
from worldclock.core.sorting import SortDirection, SortFunction, sort_cities
from worldclock.core.time_offset import TimeOffsetController

logger = logging.getLogger(__name__)


class ClockSession(BaseModel):
    """Everything a render needs besides the clock itself."""
    model_config = ConfigDict(frozen=True)

    cities: List[LocationRecord] = Field(default_factory=list)
    home: Optional[LocationRecord] = None
    detail_mode: bool = False
    sort_direction: SortDirection = SortDirection.ASCENDING
    custom_sort: Optional[SortFunction] = Field(default=None, exclude=True)
    time_offset: TimeOffsetController = Field(default_factory=TimeOffsetController)

    @model_validator(mode="after")
    def _home_is_listed(self):
        if self.home is not None and self.home not in self.cities:
            raise ValueError(f"Home city {self.home.display_name!r} is not in the city list")
        return self


def new_session(settings: Optional[Settings] = None, cities: Optional[List[LocationRecord]] = None) -> ClockSession:
    settings = settings or get_settings()
    return ClockSession(
        cities=list(cities or []),
        detail_mode=settings.detail_mode,
        sort_direction=SortDirection(settings.sort_direction),
    )


def add_city(session: ClockSession, record: LocationRecord) -> ClockSession:
    """Put a city at the front of the list. Already listed cities are left alone."""
    if record in session.cities:
        logger.info(f"{record.display_name} is already on the board")
        return session
    return session.model_copy(update={"cities": [record] + session.cities})


def delete_city(session: ClockSession, record: LocationRecord) -> ClockSession:
    """Remove a city, clearing the home city if it was the one removed."""
    cities = [city for city in session.cities if city != record]
    home = session.home
    if home is not None and home == record:
        logger.info(f"Deleted home city {record.display_name}, clearing home")
        home = None
    return session.model_copy(update={"cities": cities, "home": home})


def mark_home(session: ClockSession, record: LocationRecord) -> ClockSession:
    if record not in session.cities:
        raise ValueError(f"Cannot mark {record.display_name!r} as home: not on the board")
    return session.model_copy(update={"home": record})


def clear_home(session: ClockSession) -> ClockSession:
    return session.model_copy(update={"home": None})


def toggle_detail_mode(session: ClockSession) -> ClockSession:
    return session.model_copy(update={"detail_mode": not session.detail_mode})


def toggle_sort_direction(session: ClockSession) -> ClockSession:
    """Flip between ascending and descending, dropping any custom sort."""
    if session.sort_direction == SortDirection.ASCENDING:
        direction = SortDirection.DESCENDING
    else:
        direction = SortDirection.ASCENDING
    return session.model_copy(update={"sort_direction": direction, "custom_sort": None})


def set_custom_sort(session: ClockSession, sort_function: Optional[SortFunction]) -> ClockSession:
    return session.model_copy(update={"custom_sort": sort_function})


def step_quarter_hours(session: ClockSession, count: int = 1) -> ClockSession:
    return session.model_copy(update={"time_offset": session.time_offset.step_quarter_hours(count)})


def step_hours(session: ClockSession, count: int = 1) -> ClockSession:
    return session.model_copy(update={"time_offset": session.time_offset.step_hours(count)})


def jump_to(session: ClockSession, target: datetime, now: Optional[datetime] = None) -> ClockSession:
    return session.model_copy(update={"time_offset": session.time_offset.jump_to(target, now)})


def refresh(session: ClockSession) -> ClockSession:
    """Back to the live clock: auto-refresh on, offset zero."""
    return session.model_copy(update={"time_offset": session.time_offset.start_auto_refresh()})


def snapshot(session: ClockSession) -> dict:
    """City list and home city, ready to be written by the persistence layer."""
    return {
        "cities": [city.model_dump(exclude_none=True) for city in session.cities],
        "home": session.home.model_dump(exclude_none=True) if session.home is not None else None,
    }


def session_from_snapshot(data: dict, settings: Optional[Settings] = None) -> ClockSession:
    """Restore a saved city list and home city. A home missing from the list is dropped."""
    cities = [LocationRecord.model_validate(city) for city in data.get("cities") or []]
    home = data.get("home")
    home = LocationRecord.model_validate(home) if home else None
    if home is not None and home not in cities:
        logger.warning(f"Saved home city {home.display_name!r} is not in the saved city list, ignoring it")
        home = None
    return new_session(settings, cities).model_copy(update={"home": home})


def render_board(
    session: ClockSession,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
) -> List[str]:
    """Header plus one row per city, sorted for the reference instant.

    An empty board renders nothing; the shell shows its own hint instead.
    """
    if not session.cities:
        return []

    instant = session.time_offset.reference_instant(now)
    ordered = sort_cities(session.cities, instant, session.custom_sort or session.sort_direction)
    rows = format_rows(ordered, instant, session.home, session.detail_mode, settings)
    return [format_header(instant, session.time_offset.offset_seconds)] + rows
