"""Print the world clock board once for the configured custom timezones."""
import logging

from worldclock.core.catalog import build_catalog, catalog_choices
from worldclock.core.clock_config import load_clock_config
from worldclock.core.config import get_settings
from worldclock.core.session import new_session, render_board

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_clock_config(settings.config_path)
    catalog = build_catalog([], config.custom_timezones)
    session = new_session(settings, [catalog[label] for label in catalog_choices(catalog)])

    rows = render_board(session, settings=settings)
    if not rows:
        print("No cities configured. Add custom_timezones to your clock config.")
        return 0

    for row in rows:
        print(row)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
