import pytest

from labelcache.cache.repository import ImageCacheRepository
from labelcache.types import LabelResponse, LabelWarning


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import base64
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
        "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
    )


@pytest.fixture
def repo():
    return ImageCacheRepository()


@pytest.fixture
def make_label(sample_image_bytes):
    """Factory for LabelResponse objects with sensible defaults."""

    def _make(
        name: str = "label.png",
        index: int = 0,
        multi: bool = False,
        warnings: list[str] | None = None,
        data: bytes | None = None,
    ) -> LabelResponse:
        return LabelResponse(
            image_file_name=name,
            label=data if data is not None else sample_image_bytes,
            has_multiple_labels=multi,
            label_index=index,
            warnings=[LabelWarning(message=w, zpl_command="^FO") for w in warnings or []],
        )

    return _make
