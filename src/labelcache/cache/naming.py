"""File naming scheme: the file name is the index.

Single page:  ``<stem>-<id>.png``
Multi-page:   ``<stem>-<id>-Page<page>.png``
Sidecar:      same stem, ``.json`` extension
"""

from __future__ import annotations

import re
from pathlib import Path, PurePath

from labelcache.errors.exceptions import ImageIndexError

IMAGE_EXTENSION = ".png"
METADATA_EXTENSION = ".json"
PAGE_MARKER = "Page"

_SEPARATOR = "-"
_DIGITS = re.compile(r"[0-9]+")


def image_file_name(
    directory: Path,
    base_name: str,
    image_id: int,
    page: int | None = None,
) -> Path:
    """Build the path of a cached image.

    ``base_name`` may carry a directory and an extension; only its stem is used.
    """
    stem = PurePath(base_name).stem
    if page is None:
        return directory / f"{stem}{_SEPARATOR}{image_id}{IMAGE_EXTENSION}"
    return directory / (
        f"{stem}{_SEPARATOR}{image_id}{_SEPARATOR}{PAGE_MARKER}{page}{IMAGE_EXTENSION}"
    )


def metadata_file(image_file: Path) -> Path:
    """Path of the JSON sidecar belonging to an image file."""
    return image_file.with_suffix(METADATA_EXTENSION)


def parse_image_id(file_name: str) -> int:
    """Recover the id embedded in an image file name.

    Raises ImageIndexError when the name does not follow the naming scheme.
    """
    parts = PurePath(file_name).stem.split(_SEPARATOR)

    if PAGE_MARKER in parts[-1]:
        if len(parts) < 2:
            raise ImageIndexError(
                f"No id segment before page suffix in {file_name!r}", file_name=file_name
            )
        segment = parts[-2]
    else:
        segment = parts[-1]

    if not _DIGITS.fullmatch(segment):
        raise ImageIndexError(
            f"Id segment {segment!r} of {file_name!r} is not numeric", file_name=file_name
        )
    return int(segment)
