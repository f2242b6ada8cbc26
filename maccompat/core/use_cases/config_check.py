"""
Config check use case — validate maccompat.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from maccompat.core.config.loader import ConfigError, find_config_file, load_settings
from maccompat.core.models.settings import Settings


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: Settings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.model_dump(mode="json") if self.settings else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate settings and report issues.

    Args:
        config_path: Optional explicit path to maccompat.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    try:
        settings = load_settings(config_path, search=False)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    if config_path is None:
        result.warnings.append("No maccompat.yml found; using built-in defaults.")

    url = urlparse(settings.feed_url)
    if url.scheme not in ("http", "https") or not url.netloc:
        result.errors.append(f"feed_url is not an http(s) URL: {settings.feed_url}")
    elif url.scheme == "http":
        result.warnings.append("feed_url uses plain http; the feed is published over https.")

    if not settings.cache_dir.is_absolute():
        result.warnings.append(
            f"cache_dir is relative ({settings.cache_dir}); it will move with the working directory."
        )

    result.valid = len(result.errors) == 0
    return result
