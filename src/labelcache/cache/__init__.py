"""Image cache: a directory of PNG files whose names are the index."""

from labelcache.cache.index import get_directory, get_files, get_next_index
from labelcache.cache.naming import image_file_name, metadata_file, parse_image_id
from labelcache.cache.repository import ImageCacheRepository

__all__ = [
    "ImageCacheRepository",
    "get_directory",
    "get_files",
    "get_next_index",
    "image_file_name",
    "metadata_file",
    "parse_image_id",
]
