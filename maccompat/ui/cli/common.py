"""
Helpers shared by CLI command modules.
"""

from __future__ import annotations

import sys

import click
from pydantic import ValidationError

from maccompat.core.config.loader import ConfigError, load_settings
from maccompat.core.models.settings import Settings


def load_cli_settings(ctx: click.Context, **overrides: object) -> Settings:
    """Load settings for a command; CLI overrides win over file and env.

    Exits with status 1 on invalid configuration.
    """
    try:
        settings = load_settings(ctx.obj.get("config_path"))
        updates = {k: v for k, v in overrides.items() if v is not None}
        if updates:
            source = settings.source
            settings = Settings.model_validate({**settings.model_dump(), **updates})
            settings.source = source
    except (ConfigError, ValidationError) as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
    return settings
