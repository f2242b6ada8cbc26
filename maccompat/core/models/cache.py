"""
Cache models — what is on disk for the feed cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class CacheEntry:
    """Raw cached feed body plus its validation token (ETag).

    ``body`` is kept exactly as received. ``validation_token`` is None when
    no token has been stored.
    """

    body: bytes | None = None
    validation_token: str | None = None

    @property
    def has_body(self) -> bool:
        return bool(self.body)


@dataclass
class CacheInfo:
    """Summary of the cache artifacts, for display."""

    cache_dir: Path
    body_path: Path
    token_path: Path
    body_exists: bool = False
    body_size: int = 0
    body_modified_at: str | None = None
    body_parses: bool | None = None
    validation_token: str | None = None

    def to_dict(self) -> dict:
        return {
            "cache_dir": str(self.cache_dir),
            "body_path": str(self.body_path),
            "token_path": str(self.token_path),
            "body_exists": self.body_exists,
            "body_size": self.body_size,
            "body_modified_at": self.body_modified_at,
            "body_parses": self.body_parses,
            "validation_token": self.validation_token,
        }
