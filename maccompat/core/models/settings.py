"""
Settings model — runtime configuration for the compatibility check.

Loaded from maccompat.yml (optional) with environment overrides on top;
see ``maccompat.core.config.loader``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FEED_URL = "https://sofafeed.macadmins.io/v1/macos_data_feed.json"
DEFAULT_CACHE_DIR = Path("/private/var/tmp/sofa")
DEFAULT_USER_AGENT = "SOFA-osquery-macOSCompatibilityCheck/1.0"
DEFAULT_TIMEOUT = 30.0

# Virtualized Macs are not tracked by the feed; an M1 Mac mini stands in.
DEFAULT_VIRTUAL_MARKER = "VirtualMac"
DEFAULT_REFERENCE_MODEL = "Macmini9,1"


class Settings(BaseModel):
    """Effective configuration for one invocation."""

    model_config = ConfigDict(extra="forbid")

    feed_url: str = DEFAULT_FEED_URL
    cache_dir: Path = DEFAULT_CACHE_DIR
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    virtual_marker: str = DEFAULT_VIRTUAL_MARKER
    reference_model: str = DEFAULT_REFERENCE_MODEL

    # Where these settings came from (None = built-in defaults)
    source: Path | None = Field(default=None, exclude=True)

    @field_validator("feed_url", "user_agent", "virtual_marker", "reference_model")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("cache_dir", mode="before")
    @classmethod
    def expand_user(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Path(value).expanduser()
        if isinstance(value, Path):
            return value.expanduser()
        return value
