"""
Domain models for the compatibility check.

All models are re-exported here for convenient access:

    from maccompat.core.models import FeedDocument, CompatibilityVerdict, Settings
"""

from maccompat.core.models.cache import CacheEntry, CacheInfo
from maccompat.core.models.feed import FeedDocument, ModelSupportRecord, OSVersionRecord
from maccompat.core.models.settings import Settings
from maccompat.core.models.verdict import (
    ROW_COLUMNS,
    TABLE_NAME,
    Compatibility,
    CompatibilityVerdict,
)

__all__ = [
    # verdict.py
    "ROW_COLUMNS",
    "TABLE_NAME",
    # cache.py
    "CacheEntry",
    "CacheInfo",
    "Compatibility",
    "CompatibilityVerdict",
    # feed.py
    "FeedDocument",
    "ModelSupportRecord",
    "OSVersionRecord",
    # settings.py
    "Settings",
]
