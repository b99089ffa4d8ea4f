"""
Shortened, quality-reduced preview clip.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from vidpreview.config.defaults import DEFAULT_CLIP_DURATION, DEFAULT_CLIP_QUALITY, ENGINE_TIMEOUT
from vidpreview.config.quality import get_clip_preset
from vidpreview.exceptions import ClipGenerationError
from vidpreview.storage.layout import artifact_name
from vidpreview.tools.ffmpeg import FFmpegTool

logger = logging.getLogger(__name__)


def generate_preview_clip(
    source_path: Path | str,
    *,
    source_id: str,
    output_dir: Path,
    duration_seconds: float = DEFAULT_CLIP_DURATION,
    quality: str = DEFAULT_CLIP_QUALITY,
    ffmpeg: FFmpegTool | None = None,
    timeout: float | None = ENGINE_TIMEOUT,
) -> Path:
    """Re-encode the first duration_seconds of the source at a quality preset.

    Args:
        source_path: Path to the source video
        source_id: Identifier embedded in the filename
        output_dir: Directory for the clip
        duration_seconds: Clip length, starting at 0
        quality: Preset name (low/medium/high)
        ffmpeg: Engine wrapper (default: FFmpegTool())
        timeout: Seconds before ffmpeg is killed

    Returns:
        Path to the written MP4

    Raises:
        ValueError: If quality is not a known preset
        ClipGenerationError: If the engine fails or writes nothing
    """
    preset = get_clip_preset(quality)
    ffmpeg = ffmpeg or FFmpegTool()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / artifact_name("preview", source_id, "mp4")

    result = ffmpeg.encode_clip(
        video_path=Path(source_path),
        output_path=output_path,
        duration=duration_seconds,
        bitrate=preset["bitrate"],
        width=preset["width"],
        height=preset["height"],
        timeout=timeout,
    )

    if not result.success or not output_path.exists():
        with contextlib.suppress(FileNotFoundError):
            output_path.unlink()
        raise ClipGenerationError(
            f"Preview clip encode failed: {result.describe()}",
            stderr=result.stderr,
            details={"quality": quality, "duration": duration_seconds},
        )

    logger.info(f"Preview clip generated: {output_path}")
    return output_path
