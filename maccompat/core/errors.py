"""
Error taxonomy for the compatibility check.

Everything raised below the orchestrator derives from ``MacCompatError``.
The orchestrator turns any of these into a single degraded result row;
nothing here ever reaches the caller of ``run_check()``.
"""

from __future__ import annotations


class MacCompatError(Exception):
    """Base class for all maccompat errors."""


class HostFactError(MacCompatError):
    """The installed OS version or hardware model could not be determined."""


class FeedError(MacCompatError):
    """The feed could not be obtained from the network or the cache."""


class CacheDirectoryError(FeedError):
    """The cache directory does not exist and cannot be created."""


class NetworkError(FeedError):
    """Request construction or transport failure with no usable cache."""


class CacheInconsistencyError(FeedError):
    """Server answered 304 Not Modified but there is no cached body."""


class ParseError(FeedError):
    """Feed JSON (fresh or cached) is malformed."""


class EmptyFeedError(MacCompatError):
    """Feed parsed fine but lists no OS versions.

    The resolver never raises this; it reports ``STATUS`` in the verdict.
    """

    STATUS = "No OS versions in feed data"
