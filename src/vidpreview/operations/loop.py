"""
Animated looping preview.
"""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path

from vidpreview.config.defaults import (
    ENGINE_TIMEOUT,
    LOOP_FPS,
    LOOP_HEIGHT,
    LOOP_MAX_SECONDS,
    LOOP_SOURCE_FRACTION,
    LOOP_WIDTH,
)
from vidpreview.exceptions import LoopGenerationError
from vidpreview.storage.layout import artifact_name
from vidpreview.tools.ffmpeg import FFmpegTool

logger = logging.getLogger(__name__)


def loop_duration(source_duration: float) -> float:
    """Seconds covered by the loop: min(5s, 20% of the source)."""
    return min(LOOP_MAX_SECONDS, max(source_duration, 0.0) * LOOP_SOURCE_FRACTION)


def generate_loop(
    source_path: Path | str,
    *,
    source_id: str,
    output_dir: Path,
    source_duration: float,
    ffmpeg: FFmpegTool | None = None,
    timeout: float | None = ENGINE_TIMEOUT,
) -> Path:
    """Encode a short, scaled, frame-rate-reduced GIF that loops forever.

    Raises:
        LoopGenerationError: If the loop would be empty or the engine fails
    """
    seconds = loop_duration(source_duration)
    if seconds <= 0:
        raise LoopGenerationError(
            f"Source duration {source_duration}s leaves nothing to loop",
            details={"source_duration": source_duration},
        )

    ffmpeg = ffmpeg or FFmpegTool()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / artifact_name("loop", source_id, "gif")

    result = ffmpeg.encode_loop(
        video_path=Path(source_path),
        output_path=output_path,
        duration=seconds,
        width=LOOP_WIDTH,
        height=LOOP_HEIGHT,
        fps=LOOP_FPS,
        timeout=timeout,
    )

    if not result.success or not output_path.exists():
        with contextlib.suppress(FileNotFoundError):
            output_path.unlink()
        raise LoopGenerationError(
            f"Loop encode failed: {result.describe()}",
            stderr=result.stderr,
            details={"duration": seconds},
        )

    logger.info(f"Animated loop generated: {output_path}")
    return output_path
