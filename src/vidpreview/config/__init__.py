"""
Configuration for vidpreview.

Contains clip quality presets, default settings, and the config loader.
"""

from vidpreview.config.loader import (
    ConfigSource,
    PreviewConfig,
    clear_config_cache,
    get_config,
)
from vidpreview.config.quality import (
    CLIP_QUALITY_LADDER,
    CLIP_QUALITY_PRESETS,
    get_clip_preset,
)

__all__ = [
    "CLIP_QUALITY_PRESETS",
    "CLIP_QUALITY_LADDER",
    "get_clip_preset",
    # Config loader
    "PreviewConfig",
    "ConfigSource",
    "get_config",
    "clear_config_cache",
]
