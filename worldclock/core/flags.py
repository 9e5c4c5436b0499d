"""Country flag emoji lookup."""
from typing import Dict, Iterable, Optional

from worldclock.core.schemas import RawCountry

REGIONAL_INDICATOR_A = 0x1F1E6


def flag_from_iso2(code: Optional[str]) -> Optional[str]:
    """Turn an ISO 3166 alpha-2 code into its flag emoji ('DE' -> '🇩🇪')."""
    if not code or len(code) != 2 or not code.isascii() or not code.isalpha():
        return None
    return "".join(chr(REGIONAL_INDICATOR_A + ord(c) - ord("A")) for c in code.upper())


class FlagIndex:
    """Flags by country name, ISO code and timezone, built from the raw catalog."""

    def __init__(self, countries: Iterable[RawCountry] = ()):
        self.by_country: Dict[str, str] = {}
        self.by_timezone: Dict[str, str] = {}
        for country in countries:
            flag = country.emoji or flag_from_iso2(country.iso2)
            if not flag:
                continue
            self.by_country[country.name.casefold()] = flag
            if country.iso2:
                self.by_country[country.iso2.casefold()] = flag
            for state in country.states:
                for city in state.cities:
                    if city.timezone:
                        # First country seen keeps a shared zone
                        self.by_timezone.setdefault(city.timezone, flag)

    def lookup(self, country: Optional[str] = None, timezone: Optional[str] = None) -> Optional[str]:
        if country:
            # Catalog names and ISO codes only, so "UK" finds nothing
            flag = self.by_country.get(country.casefold())
            if flag:
                return flag
        if timezone:
            return self.by_timezone.get(timezone)
        return None
