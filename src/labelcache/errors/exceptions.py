"""Custom exception hierarchy for labelcache."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class LabelCacheError(Exception):
    """Base exception for all labelcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class CacheDirectoryError(LabelCacheError):
    """The cache root could not be created or accessed.

    Fatal: no operation proceeds without its directory.
    """

    def __init__(
        self,
        message: str = "",
        path: Path | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.original = original


class ImageIndexError(LabelCacheError):
    """An image file name does not carry a parsable id.

    Fatal when allocating the next id; listing recovers with a fallback id.
    """

    def __init__(self, message: str = "", file_name: str = "") -> None:
        super().__init__(message)
        self.file_name = file_name
