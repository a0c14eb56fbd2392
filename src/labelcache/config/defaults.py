"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

DEFAULT_IMAGE_ROOT = Path.home() / ".labelcache" / "images"


def get_defaults() -> dict[str, Any]:
    """Return a fresh copy of the package defaults."""
    return {
        "image_root": str(DEFAULT_IMAGE_ROOT),
        "log_level": "WARNING",
    }
