"""User clock configuration loaded from YAML with env var substitution."""
import os
import re
import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field

from worldclock.core.config import PACKAGE_DIR, get_settings
from worldclock.core.schemas import CustomTimezone

logger = logging.getLogger(__name__)

# Default config file location
DEFAULT_CONFIG_PATH = PACKAGE_DIR / "clock.yaml"


class ClockConfig(BaseModel):
    """Custom places plus an optional IANA -> POSIX table."""
    custom_timezones: List[CustomTimezone] = Field(default_factory=list)
    posix_mappings: Dict[str, str] = Field(default_factory=dict)


# ${NAME} or ${NAME:-default}
ENV_REFERENCE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def _expand_env(value: str) -> str:
    """Expand ${NAME} and ${NAME:-default} references in one config string.

    An unset variable without a default expands to "", which leaves e.g. a
    custom timezone entry without a zone so the catalog skips it.
    """
    def expand(match):
        name, default = match.group(1), match.group(2)
        if name in os.environ:
            return os.environ[name]
        if default is not None:
            return default
        logger.warning(f"Clock config references unset environment variable {name}")
        return ""

    return ENV_REFERENCE.sub(expand, value)


def _expand_env_in(node):
    """Expand env references in every string of a parsed YAML document."""
    if isinstance(node, str):
        return _expand_env(node)
    if isinstance(node, dict):
        return {key: _expand_env_in(item) for key, item in node.items()}
    if isinstance(node, list):
        return [_expand_env_in(item) for item in node]
    return node


# In-memory cache of the loaded config
_clock_config: Optional[ClockConfig] = None


def load_clock_config(config_path: Optional[Path] = None) -> ClockConfig:
    """Load the clock configuration from a YAML file.

    A missing file is not an error: the board then only knows the catalog.
    """
    global _clock_config

    path = config_path or get_settings().config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info(f"No clock config at {path}, using empty config")
        _clock_config = ClockConfig()
        return _clock_config

    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    raw = _expand_env_in(raw)
    try:
        config = ClockConfig(**raw)
    except Exception as e:
        logger.error(f"Invalid clock config in {path}: {e}")
        raise

    logger.info(
        f"Loaded clock config from {path}: {len(config.custom_timezones)} custom timezones, "
        f"{len(config.posix_mappings)} POSIX mappings"
    )
    _clock_config = config
    return config


def get_clock_config() -> ClockConfig:
    """Return the loaded config, loading it from the default location on first use."""
    if _clock_config is None:
        return load_clock_config()
    return _clock_config


def clear_clock_config():
    """Clear cached config. Used in tests."""
    global _clock_config
    _clock_config = None
