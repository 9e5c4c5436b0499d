"""Test fixtures for world clock tests."""
from datetime import datetime, timezone

import pytest

from worldclock.core.clock_config import clear_clock_config
from worldclock.core.config import Settings, get_settings
from worldclock.core.identifiers import get_resolver
from worldclock.core.schemas import LocationRecord


@pytest.fixture(autouse=True)
def reset_caches():
    """Each test starts without cached settings, config or resolver."""
    get_settings.cache_clear()
    get_resolver.cache_clear()
    clear_clock_config()
    yield
    get_settings.cache_clear()
    get_resolver.cache_clear()
    clear_clock_config()


@pytest.fixture
def settings():
    """Settings with explicit values so the environment can't leak in."""
    return Settings(
        wake_start_hour=8,
        wake_end_hour=22,
        detail_mode=False,
        sort_direction="ascending",
        home_glyph="⌂",
        awake_glyph="☀",
        asleep_glyph="☾",
        dst_glyph="✦",
        fallback_flag="🌐",
    )


@pytest.fixture
def instant():
    """Thursday 15 January 2026, noon UTC. No DST in the northern hemisphere."""
    return datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def london():
    return LocationRecord(country="United Kingdom", state="England", city="London",
                          timezone="Europe/London", flag="🇬🇧")


@pytest.fixture
def tokyo():
    return LocationRecord(country="Japan", state="Tokyo", city="Tokyo",
                          timezone="Asia/Tokyo", flag="🇯🇵")


@pytest.fixture
def new_york():
    return LocationRecord(country="United States", state="New York", city="New York",
                          timezone="America/New_York", flag="🇺🇸")


@pytest.fixture
def kolkata():
    return LocationRecord(country="India", state="West Bengal", city="Kolkata",
                          timezone="Asia/Kolkata", flag="🇮🇳")


@pytest.fixture
def dubai():
    return LocationRecord(country="United Arab Emirates", city="Dubai",
                          timezone="Asia/Dubai", flag="🇦🇪")


@pytest.fixture
def raw_countries():
    """A slice of the countries/states/cities dataset as decoded JSON."""
    return [
        {
            "name": "Germany",
            "iso2": "DE",
            "states": [
                {
                    "name": "Berlin",
                    "cities": [
                        {"name": "Berlin", "timezone": "Europe/Berlin", "latitude": 52.52, "longitude": 13.40},
                    ],
                },
            ],
        },
        {
            "name": "Japan",
            "emoji": "🇯🇵",
            "states": [
                {"name": "Tokyo", "cities": [{"name": "Tokyo", "timezone": "Asia/Tokyo"}]},
            ],
        },
        {
            "name": "Atlantis",
            "states": [
                {
                    "name": "Deep",
                    "cities": [
                        {"name": "Sunken", "timezone": "UTC"},
                        {"name": "Nowhere"},
                    ],
                },
            ],
        },
    ]
