"""
Default configuration values for vidpreview.

Note: Output directories are configured via config/loader.py which supports
environment variables (VIDPREVIEW_PREVIEW_DIR, VIDPREVIEW_THUMBNAIL_DIR),
project config, and user config.
"""

# Preview options
DEFAULT_THUMBNAIL_COUNT = 6
DEFAULT_THUMBNAIL_WIDTH = 320
DEFAULT_THUMBNAIL_HEIGHT = 240
DEFAULT_CLIP_DURATION = 10
DEFAULT_CLIP_QUALITY = "medium"

# Animated loop: min(LOOP_MAX_SECONDS, LOOP_SOURCE_FRACTION * duration)
LOOP_MAX_SECONDS = 5.0
LOOP_SOURCE_FRACTION = 0.2
LOOP_WIDTH = 320
LOOP_HEIGHT = 240
LOOP_FPS = 10

# Timeouts (seconds)
PROBE_TIMEOUT = 30
ENGINE_TIMEOUT = 60

# Bounded parallelism for frame extraction
THUMBNAIL_WORKERS = 4

# JPEG quality for stills (2=best, 31=worst)
THUMBNAIL_JPEG_QUALITY = 3

# Retention
RETENTION_DAYS = 7
# Files younger than this are never swept (may still be mid-write)
RETENTION_GRACE_SECONDS = 60.0
# Scheduler: first sweep after a short delay, then daily
RETENTION_INITIAL_DELAY = 60.0
RETENTION_INTERVAL = 24 * 60 * 60.0
