"""
Unified configuration loader with priority resolution.

Root directory (VIDPREVIEW_ROOT):
- macOS/Linux: ~/.vidpreview
- Windows: %APPDATA%\\vidpreview
- Override: VIDPREVIEW_ROOT environment variable

Every setting resolves with the same priority (highest to lowest):
1. Environment variable (VIDPREVIEW_PREVIEW_DIR, VIDPREVIEW_THUMBNAIL_DIR,
   VIDPREVIEW_RETENTION_DAYS, VIDPREVIEW_ENGINE_TIMEOUT,
   VIDPREVIEW_THUMBNAIL_WORKERS)
2. Project config (.vidpreview/config.yaml)
3. User config ({root_dir}/config.yaml)
4. Default ({root_dir}/previews, {root_dir}/thumbnails, config/defaults.py)

Example config.yaml:

    preview_dir: ./previews
    thumbnail_dir: ./thumbnails
    retention_days: 14
    engine_timeout: 90
    thumbnail_workers: 2
"""

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from vidpreview.config.defaults import ENGINE_TIMEOUT, RETENTION_DAYS, THUMBNAIL_WORKERS

logger = logging.getLogger(__name__)

ENV_PREFIX = "VIDPREVIEW_"


class ConfigSource(Enum):
    """Source of the configuration value."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class PreviewConfig:
    """Resolved vidpreview configuration."""

    root_dir: Path
    preview_dir: Path
    thumbnail_dir: Path
    retention_days: int = RETENTION_DAYS
    engine_timeout: float = ENGINE_TIMEOUT
    thumbnail_workers: int = THUMBNAIL_WORKERS
    source: ConfigSource = ConfigSource.DEFAULT

    def __repr__(self) -> str:
        return (
            f"PreviewConfig(preview_dir={self.preview_dir!r}, "
            f"thumbnail_dir={self.thumbnail_dir!r}, "
            f"retention_days={self.retention_days}, source={self.source.value!r})"
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "root_dir": str(self.root_dir),
            "preview_dir": str(self.preview_dir),
            "thumbnail_dir": str(self.thumbnail_dir),
            "retention_days": self.retention_days,
            "engine_timeout": self.engine_timeout,
            "thumbnail_workers": self.thumbnail_workers,
            "source": self.source.value,
        }


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _resolve_path(value: Any, config_path: Path | None = None) -> Path:
    """Resolve a configured path, relative to the config file if given."""
    path = Path(str(value)).expanduser()

    # Resolve relative paths relative to config file location
    if not path.is_absolute() and config_path is not None:
        return (config_path.parent / path).resolve()
    return path.resolve()


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .vidpreview/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".vidpreview" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the vidpreview root directory.

    Priority:
    1. VIDPREVIEW_ROOT environment variable
    2. Platform-specific default:
       - Windows: %APPDATA%\\vidpreview
       - macOS/Linux: ~/.vidpreview

    Returns:
        Path to the root directory (may not exist yet).
    """
    env_root = os.environ.get("VIDPREVIEW_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "vidpreview"
        return Path.home() / "AppData" / "Roaming" / "vidpreview"
    return Path.home() / ".vidpreview"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _coerce(key: str, value: Any, kind: type) -> Any | None:
    """Convert a raw setting to its type, logging and dropping bad values."""
    try:
        result = kind(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid {key}={value!r}")
        return None
    if result <= 0:
        logger.warning(f"Ignoring non-positive {key}={value!r}")
        return None
    return result


def _lookup(
    key: str,
    layers: list[tuple[ConfigSource, dict[str, Any] | None, Path | None]],
) -> tuple[Any, ConfigSource, Path | None] | None:
    """Find the highest-priority layer defining key."""
    for source, values, path in layers:
        if values and values.get(key) is not None:
            return values[key], source, path
    return None


def _resolve_config() -> PreviewConfig:
    """Resolve configuration from all sources in priority order.

    Returns:
        Resolved PreviewConfig. Its source reflects where preview_dir came from.
    """
    root_dir = _get_root_dir()

    env_values = {
        key: os.environ.get(f"{ENV_PREFIX}{key.upper()}") or None
        for key in (
            "preview_dir",
            "thumbnail_dir",
            "retention_days",
            "engine_timeout",
            "thumbnail_workers",
        )
    }

    project_path = _find_project_config()
    project_values = _load_yaml_config(project_path) if project_path else None

    user_path = _get_user_config_path()
    user_values = _load_yaml_config(user_path)

    layers = [
        (ConfigSource.ENV, env_values, None),
        (ConfigSource.PROJECT, project_values, project_path),
        (ConfigSource.USER, user_values, user_path),
    ]

    preview_dir = root_dir / "previews"
    source = ConfigSource.DEFAULT
    found = _lookup("preview_dir", layers)
    if found:
        value, source, path = found
        preview_dir = _resolve_path(value, path)
        logger.info(f"Using preview_dir from {source.value} config: {preview_dir}")

    thumbnail_dir = root_dir / "thumbnails"
    found = _lookup("thumbnail_dir", layers)
    if found:
        value, _, path = found
        thumbnail_dir = _resolve_path(value, path)

    settings: dict[str, Any] = {}
    for key, kind in (
        ("retention_days", int),
        ("engine_timeout", float),
        ("thumbnail_workers", int),
    ):
        found = _lookup(key, layers)
        if found:
            coerced = _coerce(key, found[0], kind)
            if coerced is not None:
                settings[key] = coerced

    config = PreviewConfig(
        root_dir=root_dir,
        preview_dir=preview_dir,
        thumbnail_dir=thumbnail_dir,
        source=source,
        **settings,
    )
    logger.debug(f"Resolved config: {config!r}")
    return config


@lru_cache(maxsize=1)
def get_config() -> PreviewConfig:
    """Get resolved vidpreview configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()
