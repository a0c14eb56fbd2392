"""labelcache — directory-backed cache for rendered label images."""

from labelcache.cache.repository import ImageCacheRepository
from labelcache.core import cache_stats, clear_all, delete_image, get_all, store_label_images
from labelcache.types import CacheStats, LabelResponse, LabelWarning, StoredImage

__all__ = [
    "ImageCacheRepository",
    "LabelResponse",
    "LabelWarning",
    "StoredImage",
    "CacheStats",
    "store_label_images",
    "get_all",
    "delete_image",
    "clear_all",
    "cache_stats",
]
