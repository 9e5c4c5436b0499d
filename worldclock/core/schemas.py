"""Data schemas for locations, catalog input and resolved local times."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MissingDisplayNameError(ValueError):
    """A location has no city, state or timezone to display."""


class LocationRecord(BaseModel):
    """A place shown on the clock board.

    Records compare by value, so the home city is matched against the
    city list by equality rather than identity.
    """
    model_config = ConfigDict(frozen=True)

    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    timezone: str  # Resolved platform identifier
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    flag: Optional[str] = None  # Emoji override

    @property
    def display_name(self) -> str:
        name = self.city or self.state or self.timezone
        if not name:
            raise MissingDisplayNameError(f"Location has no displayable name: {self!r}")
        return name


class RawCity(BaseModel):
    """A city as found in the countries/states/cities dataset."""
    name: str
    timezone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class RawState(BaseModel):
    name: str
    cities: List[RawCity] = Field(default_factory=list)


class RawCountry(BaseModel):
    """Top level of the decoded catalog hierarchy."""
    name: str
    iso2: Optional[str] = None
    emoji: Optional[str] = None
    states: List[RawState] = Field(default_factory=list)


class CustomTimezone(BaseModel):
    """A user-defined entry. Only `timezone` selects the zone, the rest is display."""
    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    timezone: Optional[str] = None
    flag: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class LocalTime(BaseModel):
    """Civic time of a zone at one instant."""
    model_config = ConfigDict(frozen=True)

    local_wall_clock: datetime
    utc_offset_minutes: int
    is_dst: bool
    abbreviation: Optional[str] = None


class ColumnWidths(BaseModel):
    """Per-column maxima used to align board rows."""
    location: int = 0
    date: int = 0
    abbreviation: int = 0
    offset: int = 0
