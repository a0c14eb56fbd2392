"""Layered configuration for the image cache.

Sources, lowest priority first: package defaults, ``~/.labelcache/config.yaml``,
the nearest ``labelcache.yaml`` at or above the working directory,
``LABELCACHE_IMAGE_ROOT`` / ``LABELCACHE_LOG_LEVEL``, then explicit arguments.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from labelcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".labelcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "labelcache.yaml"
_ENV_PREFIX = "LABELCACHE_"


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Resolve ``image_root`` and ``log_level``; None overrides are ignored."""
    config = get_defaults()
    keys = set(config)

    for path in (_GLOBAL_CONFIG_PATH, _find_project_config()):
        if path is not None:
            config.update(_select(_load_yaml_config(path) or {}, keys, source=path))

    for key in keys:
        value = os.environ.get(_ENV_PREFIX + key.upper())
        if value:
            config[key] = value

    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    config["log_level"] = str(config["log_level"]).upper()
    return config


def _select(data: dict[str, Any], keys: set[str], source: Path) -> dict[str, Any]:
    unknown = sorted(set(data) - keys)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", source, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in keys and v is not None}


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Parse a YAML mapping; unreadable or non-mapping files yield None."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    return data


def _find_project_config() -> Path | None:
    cwd = Path.cwd()
    return next(
        (d / _PROJECT_CONFIG_NAME for d in (cwd, *cwd.parents)
         if (d / _PROJECT_CONFIG_NAME).is_file()),
        None,
    )
