"""
Configuration loader — reads maccompat.yml into Settings.

Resolution order for the settings file:

    --config PATH  >  MACCOMPAT_CONFIG env var  >  maccompat.yml (walking up)

No file at all is fine: built-in defaults apply. Environment variables
(MACCOMPAT_FEED_URL, MACCOMPAT_CACHE_DIR, MACCOMPAT_USER_AGENT,
MACCOMPAT_TIMEOUT) override whatever the file says.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml

from maccompat.core.errors import MacCompatError
from maccompat.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "maccompat.yml"
CONFIG_ENV = "MACCOMPAT_CONFIG"

# Settings field → environment variable
ENV_OVERRIDES: dict[str, str] = {
    "feed_url": "MACCOMPAT_FEED_URL",
    "cache_dir": "MACCOMPAT_CACHE_DIR",
    "user_agent": "MACCOMPAT_USER_AGENT",
    "timeout": "MACCOMPAT_TIMEOUT",
}


class ConfigError(MacCompatError):
    """Raised when the settings file is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate the settings file.

    Checks MACCOMPAT_CONFIG first, then searches for maccompat.yml starting
    from ``start_dir`` (default: cwd) and walking up.

    Returns:
        Path to the settings file, or None if there is none.
    """
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).expanduser()

    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, search: bool = True) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file. If None and ``search`` is set,
            ``find_config_file()`` is used.
        search: Whether to look for a settings file when ``path`` is None.

    Returns:
        Validated Settings, with environment overrides applied.

    Raises:
        ConfigError: If the file is missing (when explicit) or invalid.
    """
    if path is None and search:
        path = find_config_file()

    data: dict = {}
    if path is not None:
        data = _read_yaml(path)

    for field, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            logger.debug("%s overridden by %s", field, env_var)
            data[field] = value

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        where = path or "environment"
        raise ConfigError(f"Invalid configuration in {where}: {e}") from e

    settings.source = path
    logger.info(
        "Settings loaded from %s (feed=%s, cache=%s)",
        path or "defaults", settings.feed_url, settings.cache_dir,
    )
    return settings


def _read_yaml(path: Path) -> dict:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "maccompat" key or be flat
    if "maccompat" in data:
        data = data["maccompat"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'maccompat' in {path}")

    return dict(data)
