"""Platform timezone identifier resolution.

Where the interpreter can load IANA zones, identifiers pass through
unchanged. Elsewhere each IANA name is swapped for the POSIX TZ string
from a mapping table that is fetched once and reused for the life of the
process. Lookups never fail: a miss, an empty table or a failed fetch
all hand back the IANA name as given.
"""
import logging
import threading
from functools import lru_cache
from typing import Callable, Dict, Mapping, Optional
from zoneinfo import available_timezones

from worldclock.core.clock_config import get_clock_config

logger = logging.getLogger(__name__)

MappingFetcher = Callable[[], Optional[Mapping[str, str]]]


def has_native_tz_database() -> bool:
    """True when zoneinfo can see an IANA database (system or tzdata package)."""
    return bool(available_timezones())


class TimezoneIdentifierResolver:
    """Maps IANA names to whatever identifier this platform understands."""

    def __init__(self, fetch_mapping: Optional[MappingFetcher] = None, native: Optional[bool] = None):
        self.fetch_mapping = fetch_mapping
        self.native = has_native_tz_database() if native is None else native
        self._mapping: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    def resolve(self, iana_name: str) -> str:
        if self.native:
            return iana_name
        return self.mapping.get(iana_name, iana_name)

    @property
    def mapping(self) -> Dict[str, str]:
        """The IANA -> POSIX table, fetched on first use."""
        if self._mapping is None:
            # Later callers block here and reuse the first caller's result
            with self._lock:
                if self._mapping is None:
                    self._mapping = self._fetch()
        return self._mapping

    def _fetch(self) -> Dict[str, str]:
        if self.fetch_mapping is None:
            logger.info("No POSIX mapping source configured, IANA names pass through")
            return {}
        try:
            data = self.fetch_mapping()
        except Exception as e:
            logger.warning(f"Failed to fetch POSIX timezone mapping: {e}")
            return {}
        if not data:
            logger.warning("POSIX timezone mapping source returned no data")
            return {}
        logger.info(f"Loaded {len(data)} POSIX timezone mappings")
        return dict(data)


@lru_cache
def get_resolver() -> TimezoneIdentifierResolver:
    """Return the process-wide resolver. Tests reset it via get_resolver.cache_clear()."""
    return TimezoneIdentifierResolver(fetch_mapping=lambda: get_clock_config().posix_mappings)
