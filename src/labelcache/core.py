"""Synchronous convenience API over ImageCacheRepository."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from labelcache.cache.repository import ImageCacheRepository
from labelcache.types import CacheStats, LabelResponse, StoredImage

_default_repository = ImageCacheRepository()


def store_label_images(
    image_path_root: str | Path,
    labels: Iterable[LabelResponse],
    repository: ImageCacheRepository | None = None,
) -> list[StoredImage]:
    """Store a batch of labels (sync wrapper)."""
    repo = repository or _default_repository
    return asyncio.run(repo.store_label_images(image_path_root, labels))


def get_all(
    image_path_root: str | Path,
    repository: ImageCacheRepository | None = None,
) -> list[StoredImage]:
    """List cached images (sync wrapper)."""
    repo = repository or _default_repository
    return asyncio.run(repo.get_all(image_path_root))


def delete_image(
    image_path_root: str | Path,
    image_name: str,
    repository: ImageCacheRepository | None = None,
) -> bool:
    """Delete one cached image (sync wrapper)."""
    repo = repository or _default_repository
    return asyncio.run(repo.delete_image(image_path_root, image_name))


def clear_all(
    image_path_root: str | Path,
    repository: ImageCacheRepository | None = None,
) -> bool:
    """Clear the cache (sync wrapper)."""
    repo = repository or _default_repository
    return asyncio.run(repo.clear_all(image_path_root))


def cache_stats(
    image_path_root: str | Path,
    repository: ImageCacheRepository | None = None,
) -> CacheStats:
    repo = repository or _default_repository
    return asyncio.run(repo.stats(image_path_root))
