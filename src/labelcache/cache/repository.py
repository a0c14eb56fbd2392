"""Directory-backed repository of rendered label images."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from labelcache.cache.index import (
    creation_datetime,
    get_directory,
    get_files,
    get_next_index,
)
from labelcache.cache.naming import image_file_name, metadata_file, parse_image_id
from labelcache.errors.exceptions import ImageIndexError
from labelcache.types import CacheStats, LabelResponse, StoredImage

logger = logging.getLogger(__name__)

# Fallback ids count down from here, well above any id a real cache reaches.
FALLBACK_ID_SEED = 99999


class ImageCacheRepository:
    """Stores, lists and deletes label images under a cache root.

    Every operation takes the cache root explicitly. Stores are serialized by
    a lock owned by the instance so that two concurrent batches never compute
    the same id. Listing, deletion and clearing are not serialized.

    The public API is async; blocking filesystem work runs in a worker thread.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    async def store_label_images(
        self,
        image_path_root: str | Path,
        labels: Iterable[LabelResponse],
    ) -> list[StoredImage]:
        """Write a batch of labels under one shared id.

        Returns one record per label whose image was written, in input order.
        """
        return await asyncio.to_thread(self._store, image_path_root, list(labels))

    async def get_all(self, image_path_root: str | Path) -> list[StoredImage]:
        """All cached images, oldest first. Empty if the root does not exist."""
        return await asyncio.to_thread(self._get_all, image_path_root)

    async def delete_image(self, image_path_root: str | Path, image_name: str) -> bool:
        """Delete one image (and its sidecar) by exact file name."""
        return await asyncio.to_thread(self._delete, image_path_root, image_name)

    async def clear_all(self, image_path_root: str | Path) -> bool:
        """Delete every image and sidecar. True only if nothing failed."""
        return await asyncio.to_thread(self._clear, image_path_root)

    async def stats(self, image_path_root: str | Path) -> CacheStats:
        return await asyncio.to_thread(self._stats, image_path_root)

    @staticmethod
    def load_metadata(image_path: str | Path) -> LabelResponse | None:
        """Read the sidecar of an image back into a LabelResponse."""
        sidecar = metadata_file(Path(image_path))
        if not sidecar.exists():
            return None
        return LabelResponse.model_validate_json(sidecar.read_text(encoding="utf-8"))

    # ── Blocking implementations ──

    def _store(
        self,
        image_path_root: str | Path,
        labels: list[LabelResponse],
    ) -> list[StoredImage]:
        stored: list[StoredImage] = []

        with self._lock:
            directory = get_directory(image_path_root)
            image_id = get_next_index(directory)

            for label in labels:
                page = label.label_index + 1 if label.has_multiple_labels else None
                path = image_file_name(directory, label.image_file_name, image_id, page)

                try:
                    path.write_bytes(label.label)
                except OSError as e:
                    logger.error("Failed to write image %s: %s", path, e)
                    continue

                if label.has_warnings:
                    try:
                        metadata_file(path).write_text(
                            label.model_dump_json(indent=2), encoding="utf-8"
                        )
                    except OSError as e:
                        logger.warning("Failed to write metadata for %s: %s", path, e)

                stored.append(
                    StoredImage(id=image_id, full_path=path, timestamp=creation_datetime(path))
                )

        logger.info(
            "Stored %d of %d label image(s) with id %d in %s",
            len(stored), len(labels), image_id, directory,
        )
        return stored

    def _get_all(self, image_path_root: str | Path) -> list[StoredImage]:
        directory = Path(image_path_root).expanduser()
        if not directory.is_dir():
            return []

        fallback_id = FALLBACK_ID_SEED
        images: list[StoredImage] = []

        for path in get_files(directory):
            try:
                image_id = parse_image_id(path.name)
            except ImageIndexError as e:
                logger.warning("%s; using fallback id %d", e.message, fallback_id)
                image_id = fallback_id
                fallback_id -= 1

            try:
                timestamp = creation_datetime(path)
            except FileNotFoundError:
                continue
            images.append(StoredImage(id=image_id, full_path=path.resolve(), timestamp=timestamp))

        return images

    def _delete(self, image_path_root: str | Path, image_name: str) -> bool:
        directory = Path(image_path_root).expanduser()
        if not directory.is_dir():
            return False

        target = next(
            (p for p in directory.iterdir() if p.name == image_name and p.is_file()),
            None,
        )
        if target is None:
            return False

        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug("%s already removed", target)
        metadata_file(target).unlink(missing_ok=True)

        logger.debug("Deleted %s", target)
        return True

    def _clear(self, image_path_root: str | Path) -> bool:
        directory = Path(image_path_root).expanduser()
        if not directory.is_dir():
            return False

        error_count = 0
        for path in get_files(directory):
            try:
                path.unlink()
                metadata_file(path).unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Failed to delete %s: %s", path, e)
                error_count += 1

        return error_count == 0

    def _stats(self, image_path_root: str | Path) -> CacheStats:
        directory = Path(image_path_root).expanduser()
        if not directory.is_dir():
            return CacheStats(next_id=1)

        stats = CacheStats()
        for path in get_files(directory):
            try:
                stats.size_bytes += path.stat().st_size
            except FileNotFoundError:
                continue
            stats.images += 1
            try:
                stats.size_bytes += metadata_file(path).stat().st_size
            except FileNotFoundError:
                continue
            stats.sidecars += 1

        try:
            stats.next_id = get_next_index(directory)
        except ImageIndexError as e:
            logger.warning("Cannot compute next id: %s", e.message)
        return stats
