"""Shared Pydantic models for labelcache."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from labelcache.cache.naming import metadata_file

# ── Input models ──


class LabelWarning(BaseModel):
    """A warning reported by the label renderer for one ZPL command."""

    byte_index: int | None = None
    byte_size: int | None = None
    zpl_command: str | None = None
    parameter_number: int | None = None
    message: str = ""


class LabelResponse(BaseModel):
    """One rendered label page as produced by the rendering pipeline."""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    image_file_name: str
    label: bytes
    has_multiple_labels: bool = False
    label_index: int = Field(default=0, ge=0)
    warnings: list[LabelWarning] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


# ── Output models ──


class StoredImage(BaseModel):
    """A cached image, rebuilt from the file on disk."""

    id: int
    full_path: Path
    timestamp: datetime | None = None

    @property
    def name(self) -> str:
        return self.full_path.name

    @property
    def metadata_path(self) -> Path:
        return metadata_file(self.full_path)


class CacheStats(BaseModel):
    """Aggregate statistics for one cache directory."""

    images: int = 0
    sidecars: int = 0
    size_bytes: int = 0
    next_id: int | None = None

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)
