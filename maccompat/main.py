"""
maccompat — CLI entrypoint.

Usage:
    python -m maccompat.main --help
    python -m maccompat.main check
    python -m maccompat.main check --json
    python -m maccompat.main cache show
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from maccompat import __version__
from maccompat.core.observability.logging_config import setup_logging
from maccompat.ui.cli.common import load_cli_settings

_STATUS_STYLE = {
    "Pass": ("✅", "green"),
    "Fail": ("❌", "red"),
    "UnsupportedHardware": ("⛔", "yellow"),
}


@click.group()
@click.version_option(version=__version__, prog_name="maccompat")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to maccompat.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """maccompat — is this Mac on the newest macOS its hardware supports?"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("MACCOMPAT_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("MACCOMPAT_LOG_FILE"),
        log_file_level=os.environ.get("MACCOMPAT_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--system-version", default=None, help="Use this macOS version instead of sw_vers.")
@click.option("--model", "model_identifier", default=None, help="Use this model identifier instead of sysctl.")
@click.option("--feed-url", default=None, help="Override the feed URL.")
@click.option("--cache-dir", default=None, help="Override the cache directory.")
@click.pass_context
def check(
    ctx: click.Context,
    as_json: bool,
    system_version: str | None,
    model_identifier: str | None,
    feed_url: str | None,
    cache_dir: str | None,
) -> None:
    """Check whether this Mac runs the newest macOS its model supports.

    Always prints exactly one result row; failures show up as
    is_compatible = -1 with the reason in status.
    """
    from maccompat.core.models.verdict import ROW_COLUMNS
    from maccompat.core.use_cases.check import run_check

    settings = load_cli_settings(ctx, feed_url=feed_url, cache_dir=cache_dir)
    result = run_check(
        settings,
        system_version=system_version,
        model_identifier=model_identifier,
    )
    row = result.row()

    if as_json:
        click.echo(json.dumps(row, indent=2))
        return

    icon, color = _STATUS_STYLE.get(str(row["status"]), ("❔", "white"))
    width = max(len(name) for name, _ in ROW_COLUMNS)

    click.echo()
    click.secho(f"{icon} {row['status']}", fg=color, bold=True)
    for name, _ in ROW_COLUMNS:
        click.echo(f"   {name:<{width}}  {row[name]}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def columns(as_json: bool) -> None:
    """List the columns of the result row."""
    from maccompat.core.models.verdict import ROW_COLUMNS, TABLE_NAME

    if as_json:
        click.echo(json.dumps(
            {"table": TABLE_NAME, "columns": [{"name": n, "type": t} for n, t in ROW_COLUMNS]},
            indent=2,
        ))
        return

    click.secho(f"\n📋 {TABLE_NAME}", fg="cyan", bold=True)
    for name, col_type in ROW_COLUMNS:
        click.echo(f"   {name:<24} {col_type}")
    click.echo()


@cli.group()
def config() -> None:
    """Settings commands."""


@config.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show the effective settings."""
    settings = load_cli_settings(ctx)
    data = settings.model_dump(mode="json")

    if as_json:
        click.echo(json.dumps(
            {"source": str(settings.source) if settings.source else None, "settings": data},
            indent=2,
        ))
        return

    click.secho("\n⚙️  Settings", fg="cyan", bold=True)
    click.echo(f"   source: {settings.source or 'built-in defaults'}")
    for key, value in data.items():
        click.echo(f"   {key}: {value}")
    click.echo()


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate maccompat.yml."""
    from maccompat.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Source: {result.config_path or 'built-in defaults'}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


# ── Sub-groups ──────────────────────────────────────────────────

from maccompat.ui.cli.cache import cache  # noqa: E402

cli.add_command(cache)


if __name__ == "__main__":
    cli()
