"""Exception hierarchy for the image cache."""

from labelcache.errors.exceptions import (
    CacheDirectoryError,
    ImageIndexError,
    LabelCacheError,
)

__all__ = [
    "LabelCacheError",
    "CacheDirectoryError",
    "ImageIndexError",
]
