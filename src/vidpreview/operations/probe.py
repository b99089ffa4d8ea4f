"""
Source metadata probing.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from vidpreview.config.defaults import PROBE_TIMEOUT
from vidpreview.exceptions import ProbeError
from vidpreview.models.metadata import VideoMetadata
from vidpreview.tools.ffprobe import FFprobeTool

logger = logging.getLogger(__name__)


def probe_video(
    source_path: Path | str,
    *,
    ffprobe: FFprobeTool | None = None,
    timeout: float | None = PROBE_TIMEOUT,
) -> VideoMetadata:
    """Read duration, principal stream resolution and file size.

    The probed duration, not any declared container length, drives all
    downstream scheduling.

    Args:
        source_path: Path to the source video
        ffprobe: Engine wrapper (default: FFprobeTool())
        timeout: Seconds before ffprobe is killed

    Returns:
        VideoMetadata for the source

    Raises:
        ProbeError: If the file is missing or unreadable, ffprobe fails,
            or there is no usable video stream
    """
    path = Path(source_path)
    if not path.is_file():
        raise ProbeError(f"Source file not found: {path}", source_path=str(path))

    ffprobe = ffprobe or FFprobeTool()
    result = ffprobe.probe_raw(path, timeout=timeout)
    if not result.success:
        raise ProbeError(
            f"Could not probe {path}: {result.describe()}",
            source_path=str(path),
            stderr=result.stderr,
        )

    try:
        probe_data = json.loads(result.stdout)
    except json.JSONDecodeError as e:
        raise ProbeError(
            f"Unparseable probe output for {path}: {e}",
            source_path=str(path),
        ) from e

    stream = ffprobe.find_video_stream(probe_data)
    if stream is None:
        raise ProbeError(f"No video stream found in {path}", source_path=str(path))

    width = stream.get("width")
    height = stream.get("height")
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise ProbeError(
            f"Video stream in {path} has no usable resolution ({width}x{height})",
            source_path=str(path),
        )

    try:
        file_size = path.stat().st_size
    except OSError as e:
        raise ProbeError(f"Cannot stat {path}: {e}", source_path=str(path)) from e

    metadata = VideoMetadata(
        duration_seconds=ffprobe.parse_duration(probe_data, stream),
        width=width,
        height=height,
        file_size_bytes=file_size,
    )
    logger.debug(
        f"Probed {path.name}: {metadata.duration_seconds:.2f}s "
        f"{metadata.resolution_label} {file_size} bytes"
    )
    return metadata
