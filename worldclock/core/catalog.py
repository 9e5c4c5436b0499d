"""Location catalog built from the countries/states/cities dataset.

Labels are the catalog keys. Custom entries go in first and are never
replaced by a dataset entry with the same label. Among dataset entries
(or among custom entries) a repeated label keeps the last record seen.
Entries that cannot be placed on the board are skipped with a warning,
never rendered with a blank name.
"""
import logging
from typing import Dict, Iterable, List, Optional, Union

from worldclock.core.config import get_settings
from worldclock.core.flags import FlagIndex
from worldclock.core.identifiers import TimezoneIdentifierResolver, get_resolver
from worldclock.core.schemas import CustomTimezone, LocationRecord, RawCountry

logger = logging.getLogger(__name__)


def catalog_label(flag: str, country: str, city: str, state: str) -> str:
    return f"{flag} {country} - {city}, {state}"


def custom_label(flag: str, record: LocationRecord) -> str:
    return f"{flag} {record.display_name}"


def build_catalog(
    countries: Iterable[Union[RawCountry, dict]],
    custom: Iterable[Union[CustomTimezone, dict]] = (),
    resolver: Optional[TimezoneIdentifierResolver] = None,
    fallback_flag: Optional[str] = None,
) -> Dict[str, LocationRecord]:
    """Build the label -> LocationRecord mapping offered by the city picker."""
    resolver = resolver or get_resolver()
    fallback_flag = fallback_flag or get_settings().fallback_flag
    countries = [RawCountry.model_validate(c) for c in countries]
    flags = FlagIndex(countries)

    catalog: Dict[str, LocationRecord] = {}

    for entry in custom:
        entry = CustomTimezone.model_validate(entry)
        if not entry.timezone:
            logger.warning(f"Skipping custom timezone without a zone: {entry.model_dump(exclude_none=True)}")
            continue
        flag = entry.flag or flags.lookup(entry.country, entry.timezone) or fallback_flag
        record = LocationRecord(
            country=entry.country,
            state=entry.state,
            city=entry.city,
            timezone=resolver.resolve(entry.timezone),
            latitude=entry.latitude,
            longitude=entry.longitude,
            flag=flag,
        )
        catalog[custom_label(flag, record)] = record

    reserved = set(catalog)
    skipped = 0

    for country in countries:
        flag = flags.lookup(country.name) or fallback_flag
        for state in country.states:
            for city in state.cities:
                if not city.timezone:
                    skipped += 1
                    continue
                label = catalog_label(flag, country.name, city.name, state.name)
                if label in reserved:
                    continue
                catalog[label] = LocationRecord(
                    country=country.name,
                    state=state.name,
                    city=city.name or None,
                    timezone=resolver.resolve(city.timezone),
                    latitude=city.latitude,
                    longitude=city.longitude,
                    flag=flag,
                )

    if skipped:
        logger.warning(f"Skipped {skipped} catalog cities without a timezone")
    logger.info(f"Built catalog with {len(catalog)} locations")
    return catalog


def catalog_choices(catalog: Dict[str, LocationRecord]) -> List[str]:
    """Labels in the stable order a picker should present them."""
    return sorted(catalog)
