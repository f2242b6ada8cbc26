"""
Feed fetcher — conditional GET of the SOFA feed with cache fallback.

Branches, in order:

    1. Cache directory    cannot create it      → CacheDirectoryError
    2. Request            cached ETag sent as If-None-Match
    3. 304 Not Modified   cached body           → parse, or error
    4. 200 OK             persist body + ETag   → parse, or ParseError
    5. anything else      stale cached body     → parse, or NetworkError

A 200 response with an unparseable body is a hard error: the fresh data is
broken and silently answering from the old cache would hide that.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from typing import Any

from pydantic import ValidationError

from maccompat.core.errors import (
    CacheInconsistencyError,
    NetworkError,
    ParseError,
)
from maccompat.core.models.feed import FeedDocument
from maccompat.core.models.settings import Settings
from maccompat.core.persistence.cache_store import CacheStore

logger = logging.getLogger(__name__)

Opener = Callable[..., Any]

_HTTP_OK = 200
_HTTP_NOT_MODIFIED = 304


class FeedFetcher:
    """Fetch the feed document, keeping ``cache`` up to date.

    Args:
        settings: Feed URL, user agent and timeout.
        cache: Cache for the raw body and its ETag.
        opener: ``urllib.request.urlopen``-compatible callable. Tests pass
            a fake; production uses the default.
    """

    def __init__(
        self,
        settings: Settings,
        cache: CacheStore,
        opener: Opener | None = None,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self._open = opener or urllib.request.urlopen

    def fetch(self) -> FeedDocument:
        """Return the current feed document.

        Raises:
            CacheDirectoryError: The cache directory cannot be created.
            NetworkError: The request failed and nothing usable is cached.
            CacheInconsistencyError: 304 received but nothing is cached.
            ParseError: Fresh or cached feed JSON is malformed.
        """
        self.cache.ensure_directory()

        request = self._build_request(self.cache.load_token())

        try:
            with self._open(request, timeout=self.settings.timeout) as resp:
                status = resp.status
                if status == _HTTP_OK:
                    body = resp.read()
                    return self._handle_fresh(body, resp.headers.get("ETag"))
        except urllib.error.HTTPError as e:
            if e.code == _HTTP_NOT_MODIFIED:
                return self._handle_not_modified()
            return self._fallback_to_cache(f"HTTP {e.code}")
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            # Timeouts and resets may also surface while reading the body.
            reason = getattr(e, "reason", None) or e
            return self._fallback_to_cache(str(reason))

        return self._fallback_to_cache(f"HTTP {status}")

    # ── Request ─────────────────────────────────────────────────

    def _build_request(self, token: str | None) -> urllib.request.Request:
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "application/json",
        }
        if token:
            headers["If-None-Match"] = token

        try:
            request = urllib.request.Request(
                self.settings.feed_url,
                method="GET",
                headers=headers,
            )
        except ValueError as e:
            raise NetworkError(f"failed to create request: {e}") from e

        logger.debug(
            "GET %s (If-None-Match=%s)", self.settings.feed_url, token or "-",
        )
        return request

    # ── Branches ────────────────────────────────────────────────

    def _handle_not_modified(self) -> FeedDocument:
        logger.info("Feed not modified, using cached copy")
        body = self.cache.load_body()
        if body is None:
            raise CacheInconsistencyError(
                "server reported feed unchanged but no cached data is available"
            )
        return self._parse(body, "cached")

    def _handle_fresh(self, body: bytes, etag: str | None) -> FeedDocument:
        logger.info("Fetched fresh feed (%d bytes)", len(body))

        if self.cache.store_body(body):
            if etag:
                if not self.cache.store_token(etag):
                    logger.warning("Failed to cache ETag, next fetch will be unconditional")
                    self.cache.clear_token()
            else:
                logger.debug("Response carried no ETag")
                self.cache.clear_token()
        else:
            logger.warning("Failed to cache feed data, continuing without cache update")

        return self._parse(body, "fetched")

    def _fallback_to_cache(self, reason: str) -> FeedDocument:
        body = self.cache.load_body()
        if body is None:
            raise NetworkError(f"failed to fetch feed ({reason}) and no cache available")
        logger.warning("Failed to fetch new data (%s), using cached data", reason)
        return self._parse(body, "cached")

    @staticmethod
    def _parse(body: bytes, origin: str) -> FeedDocument:
        try:
            return FeedDocument.from_bytes(body)
        except ValidationError as e:
            raise ParseError(
                f"failed to parse {origin} feed data: {e.error_count()} error(s), "
                f"first: {e.errors()[0]['msg']}"
            ) from e
