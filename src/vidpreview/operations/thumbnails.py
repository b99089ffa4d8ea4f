"""
Thumbnail extraction for scheduled sample points.
"""

from __future__ import annotations

import contextlib
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from vidpreview.config.defaults import ENGINE_TIMEOUT, THUMBNAIL_WORKERS
from vidpreview.exceptions import ThumbnailError
from vidpreview.models.bundle import ThumbnailArtifact, ThumbnailSpec
from vidpreview.storage.layout import artifact_name
from vidpreview.tools.ffmpeg import FFmpegTool

logger = logging.getLogger(__name__)


def _discard(path: Path) -> None:
    with contextlib.suppress(FileNotFoundError):
        path.unlink()


def extract_thumbnail(
    source_path: Path,
    spec: ThumbnailSpec,
    *,
    source_id: str,
    output_dir: Path,
    ffmpeg: FFmpegTool,
    timeout: float | None = ENGINE_TIMEOUT,
) -> ThumbnailArtifact:
    """Extract one still for a spec.

    Raises:
        ThumbnailError: If the engine fails, times out, or writes nothing
            (typically an offset past the end of the source)
    """
    output_path = output_dir / artifact_name(
        "thumb", source_id, "jpg", index=spec.index
    )
    result = ffmpeg.extract_frame(
        video_path=source_path,
        output_path=output_path,
        timestamp=spec.time_offset_seconds,
        width=spec.target_width,
        height=spec.target_height,
        timeout=timeout,
    )
    details = {"index": spec.index, "offset": spec.time_offset_seconds}

    if not result.success:
        _discard(output_path)
        raise ThumbnailError(
            f"Frame extraction at {spec.time_offset_seconds}s failed: {result.describe()}",
            stderr=result.stderr,
            details=details,
        )

    try:
        size = output_path.stat().st_size
    except FileNotFoundError:
        raise ThumbnailError(
            f"No frame written at {spec.time_offset_seconds}s (offset past end?)",
            stderr=result.stderr,
            details=details,
        ) from None
    except OSError as e:
        raise ThumbnailError(
            f"Cannot stat frame at {spec.time_offset_seconds}s: {e}",
            details=details,
        ) from e

    if size == 0:
        _discard(output_path)
        raise ThumbnailError(
            f"Empty frame written at {spec.time_offset_seconds}s",
            stderr=result.stderr,
            details=details,
        )

    return ThumbnailArtifact(
        file_path=output_path,
        time_offset_seconds=spec.time_offset_seconds,
        width=spec.target_width,
        height=spec.target_height,
        file_size_bytes=size,
    )


def generate_thumbnails(
    source_path: Path | str,
    specs: list[ThumbnailSpec],
    *,
    source_id: str,
    output_dir: Path,
    ffmpeg: FFmpegTool | None = None,
    max_workers: int = THUMBNAIL_WORKERS,
    timeout: float | None = ENGINE_TIMEOUT,
) -> list[ThumbnailArtifact]:
    """Extract a still for every spec with bounded parallelism.

    A failed item is logged and left out; it never affects its siblings.
    An empty result is a valid, degraded outcome.

    Args:
        source_path: Path to the source video
        specs: Scheduled sample points
        source_id: Identifier embedded in filenames
        output_dir: Directory for the stills
        ffmpeg: Engine wrapper (default: FFmpegTool())
        max_workers: Maximum concurrent ffmpeg processes
        timeout: Per-extraction timeout in seconds

    Returns:
        Successful artifacts ordered by offset
    """
    if not specs:
        return []

    source_path = Path(source_path)
    ffmpeg = ffmpeg or FFmpegTool()
    output_dir.mkdir(parents=True, exist_ok=True)

    def _run(spec: ThumbnailSpec) -> ThumbnailArtifact | None:
        try:
            artifact = extract_thumbnail(
                source_path,
                spec,
                source_id=source_id,
                output_dir=output_dir,
                ffmpeg=ffmpeg,
                timeout=timeout,
            )
        except ThumbnailError as e:
            logger.warning(
                f"Thumbnail {spec.index}/{len(specs)} for {source_path} skipped: {e}"
            )
            return None
        logger.info(
            f"Generated thumbnail {spec.index}/{len(specs)} at {spec.time_offset_seconds}s"
        )
        return artifact

    workers = max(1, min(max_workers, len(specs)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="thumb") as pool:
        results = list(pool.map(_run, specs))

    artifacts = [a for a in results if a is not None]
    artifacts.sort(key=lambda a: a.time_offset_seconds)
    return artifacts
