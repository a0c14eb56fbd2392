"""Directory scanning and id allocation.

The cache directory is the database: there is no manifest, and the next id
is derived from the names of the images already present.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from labelcache.cache.naming import IMAGE_EXTENSION, parse_image_id
from labelcache.errors.exceptions import CacheDirectoryError

logger = logging.getLogger(__name__)


def get_directory(image_path_root: str | Path) -> Path:
    """Ensure the cache root exists (with parents) and return it."""
    directory = Path(image_path_root).expanduser()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CacheDirectoryError(
            f"Cannot create cache directory {directory}: {e}", path=directory, original=e
        ) from e
    return directory.resolve()


def creation_time(path: Path) -> float:
    """Best available creation timestamp for a file.

    Falls back to st_ctime where the platform does not expose a birth time.
    """
    st = path.stat()
    return getattr(st, "st_birthtime", None) or st.st_ctime


def creation_datetime(path: Path) -> datetime:
    return datetime.fromtimestamp(creation_time(path))


def get_files(directory: Path) -> list[Path]:
    """All cached images in ``directory``, oldest first."""
    stamped: list[tuple[float, str, Path]] = []
    for path in directory.glob(f"*{IMAGE_EXTENSION}"):
        try:
            if not path.is_file():
                continue
            stamped.append((creation_time(path), path.name, path))
        except FileNotFoundError:
            # Removed between glob and stat
            continue
    stamped.sort(key=lambda item: (item[0], item[1]))
    return [path for _, _, path in stamped]


def get_file_indices(directory: Path) -> list[int]:
    """Ids of every cached image. Any unparsable name raises ImageIndexError."""
    return [parse_image_id(path.name) for path in get_files(directory)]


def get_next_index(directory: Path) -> int:
    """One past the highest id in use, or 1 for an empty directory."""
    indices = get_file_indices(directory)
    if not indices:
        return 1
    return max(indices) + 1
