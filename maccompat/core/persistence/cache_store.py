"""
Feed cache persistence — the last fetched feed body and its ETag.

Two artifacts live in the cache directory:

    macos_data_feed.json       raw feed body, exactly as received
    macos_data_feed_etag.txt   validation token for that body

Reads never raise; a missing or unreadable artifact is reported as None.
Writes are atomic (write to temp file, then rename) so a concurrent
invocation never sees a half-written body. Write failures are logged and
reported as False; caching is best-effort.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

from maccompat.core.errors import CacheDirectoryError
from maccompat.core.models.cache import CacheEntry, CacheInfo
from maccompat.core.models.feed import FeedDocument

logger = logging.getLogger(__name__)

BODY_FILE = "macos_data_feed.json"
TOKEN_FILE = "macos_data_feed_etag.txt"

_DIR_MODE = 0o755
_FILE_MODE = 0o644


class CacheStore:
    """Reads and writes the feed cache in ``cache_dir``.

    Knows nothing about feed semantics: bodies are opaque bytes.
    """

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = Path(cache_dir)
        self.body_path = self.cache_dir / BODY_FILE
        self.token_path = self.cache_dir / TOKEN_FILE

    # ── Directory ───────────────────────────────────────────────

    def ensure_directory(self) -> None:
        """Create the cache directory if needed.

        Raises:
            CacheDirectoryError: If the directory cannot be created.
        """
        try:
            self.cache_dir.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise CacheDirectoryError(
                f"failed to create cache directory {self.cache_dir}: {e}"
            ) from e

    # ── Reads ───────────────────────────────────────────────────

    def load_body(self) -> bytes | None:
        """Return the cached feed body, or None if absent, empty, or unreadable."""
        try:
            body = self.body_path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Cannot read cached feed %s: %s", self.body_path, e)
            return None
        return body or None

    def load_token(self) -> str | None:
        """Return the cached validation token, trimmed, or None."""
        try:
            token = self.token_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read cached ETag %s: %s", self.token_path, e)
            return None
        return token or None

    def load(self) -> CacheEntry:
        """Load both artifacts."""
        return CacheEntry(body=self.load_body(), validation_token=self.load_token())

    # ── Writes ──────────────────────────────────────────────────

    def store_body(self, body: bytes) -> bool:
        """Overwrite the cached feed body. Returns False on failure."""
        return self._write_atomic(self.body_path, body)

    def store_token(self, token: str) -> bool:
        """Overwrite the cached validation token. Returns False on failure.

        Only call this after ``store_body()`` succeeded for the body the
        token belongs to.
        """
        return self._write_atomic(self.token_path, token.strip().encode("utf-8"))

    def clear_token(self) -> bool:
        """Remove the cached validation token. Returns False on failure."""
        try:
            self.token_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Failed to remove stale ETag %s: %s", self.token_path, e)
            return False
        return True

    def clear(self) -> list[Path]:
        """Delete both artifacts. Returns the paths that were removed.

        The token goes first so a failure part-way never leaves a token
        without its body.
        """
        removed: list[Path] = []
        for path in (self.token_path, self.body_path):
            if path.exists():
                path.unlink()
                removed.append(path)
                logger.info("Removed %s", path)
        return removed

    def _write_atomic(self, path: Path, data: bytes) -> bool:
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=path.parent,
                prefix=".maccompat_",
                suffix=".tmp",
            )
            tmp = Path(tmp_path)
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(data)
                tmp.chmod(_FILE_MODE)
                tmp.replace(path)
                logger.debug("Cached %d bytes to %s", len(data), path)
            except Exception:
                tmp.unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.warning("Failed to write cache file %s: %s", path, e)
            return False
        return True

    # ── Inspection ──────────────────────────────────────────────

    def describe(self) -> CacheInfo:
        """Summarize what is currently cached (for ``maccompat cache show``)."""
        info = CacheInfo(
            cache_dir=self.cache_dir,
            body_path=self.body_path,
            token_path=self.token_path,
        )
        entry = self.load()
        info.validation_token = entry.validation_token

        if self.body_path.is_file():
            stat = self.body_path.stat()
            info.body_exists = True
            info.body_size = stat.st_size
            info.body_modified_at = datetime.fromtimestamp(stat.st_mtime, UTC).isoformat()

        if entry.has_body:
            try:
                FeedDocument.from_bytes(entry.body)
                info.body_parses = True
            except ValueError:
                info.body_parses = False

        return info
