"""
Check use case — host facts → feed → verdict, always exactly one row.

    host facts      sw_vers / sysctl (or explicit overrides)
        ↓
    FeedFetcher     conditional GET + cache fallback
        ↓
    resolve()       pure decision table
        ↓
    CheckResult     one row, never an exception

Every failure becomes an indeterminate (-1) verdict with a descriptive
status. A fresh CacheStore and FeedFetcher are built per call; nothing is
kept between invocations except the cache files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from maccompat.adapters import host
from maccompat.core.models.feed import FeedDocument
from maccompat.core.models.settings import Settings
from maccompat.core.models.verdict import CompatibilityVerdict
from maccompat.core.persistence.cache_store import CacheStore
from maccompat.core.services.feed_fetcher import FeedFetcher, Opener
from maccompat.core.services.resolver import os_major, resolve

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Outcome of one compatibility check."""

    verdict: CompatibilityVerdict
    feed: FeedDocument | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def row(self) -> dict[str, str | int]:
        """The single output row."""
        return self.verdict.to_row()

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {"row": self.row()}
        if self.error:
            result["error"] = self.error
        return result


def run_check(
    settings: Settings | None = None,
    *,
    system_version: str | None = None,
    model_identifier: str | None = None,
    version_lookup: Callable[[], str] = host.get_system_version,
    model_lookup: Callable[[], str] = host.get_model_identifier,
    opener: Opener | None = None,
) -> CheckResult:
    """Run one compatibility check.

    Args:
        settings: Effective settings (default: built-in defaults).
        system_version: Use this OS version instead of asking the host.
        model_identifier: Use this model identifier instead of asking the host.
        version_lookup: Host probe for the OS version.
        model_lookup: Host probe for the model identifier.
        opener: urlopen-compatible callable handed to the FeedFetcher.

    Returns:
        CheckResult. Never raises.
    """
    settings = settings or Settings()

    # ── Host facts ──────────────────────────────────────────────
    try:
        version = system_version or version_lookup()
        model = model_identifier or model_lookup()
    except Exception as e:
        logger.error("Cannot determine host facts: %s", e)
        status = f"Error getting system info: {e}"
        return CheckResult(verdict=CompatibilityVerdict.error(status), error=status)

    logger.info("Host: macOS %s on %s", version, model)

    # ── Feed ────────────────────────────────────────────────────
    try:
        fetcher = FeedFetcher(settings, CacheStore(settings.cache_dir), opener=opener)
        feed = fetcher.fetch()
    except Exception as e:
        logger.error("Could not obtain feed data: %s", e)
        status = f"Could not obtain data: {e}"
        verdict = CompatibilityVerdict.error(
            status,
            system_version=version,
            system_os_major=os_major(version),
            model_identifier=model,
        )
        return CheckResult(verdict=verdict, error=status)

    # ── Verdict ─────────────────────────────────────────────────
    verdict = resolve(
        feed,
        version,
        model,
        virtual_marker=settings.virtual_marker,
        reference_model=settings.reference_model,
    )
    logger.info(
        "Latest %s, latest for %s %s → %s",
        verdict.latest_macos, verdict.model_identifier,
        verdict.latest_compatible_macos, verdict.status,
    )
    return CheckResult(verdict=verdict, feed=feed)
