"""
CLI commands for the feed cache.

Thin wrappers over ``maccompat.core.persistence.cache_store``.
"""

from __future__ import annotations

import json
import sys

import click


def _cache_store(ctx: click.Context):
    from maccompat.core.persistence.cache_store import CacheStore
    from maccompat.ui.cli.common import load_cli_settings

    settings = load_cli_settings(ctx)
    return CacheStore(settings.cache_dir)


@click.group()
def cache() -> None:
    """Feed cache — inspect or clear the cached feed and ETag."""


@cache.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show what is cached."""
    info = _cache_store(ctx).describe()

    if as_json:
        click.echo(json.dumps(info.to_dict(), indent=2))
        return

    click.secho(f"\n🗄️  {info.cache_dir}", fg="cyan", bold=True)
    if not info.body_exists:
        click.echo("   No cached feed.")
    else:
        parses = {True: "valid JSON", False: "⚠️  unparseable", None: "empty"}[info.body_parses]
        click.echo(f"   Feed:  {info.body_path} ({info.body_size} bytes, {parses})")
        click.echo(f"          updated {info.body_modified_at}")
    click.echo(f"   ETag:  {info.validation_token or '—'}")
    click.echo()


@cache.command()
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Delete the cached feed and ETag."""
    store = _cache_store(ctx)
    try:
        removed = store.clear()
    except OSError as e:
        click.secho(f"❌ Failed to clear cache: {e}", fg="red", err=True)
        sys.exit(1)

    if not removed:
        click.echo("Nothing to clear.")
        return
    for path in removed:
        click.secho(f"🗑️  Removed {path}", fg="green")
