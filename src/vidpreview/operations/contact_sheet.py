"""
Contact sheet compositing from extracted thumbnails.
"""

from __future__ import annotations

import contextlib
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

from vidpreview.config.defaults import ENGINE_TIMEOUT
from vidpreview.exceptions import ContactSheetError
from vidpreview.storage.layout import artifact_name
from vidpreview.tools.ffmpeg import FFmpegTool

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vidpreview.models.bundle import ThumbnailArtifact

logger = logging.getLogger(__name__)


def compute_grid(count: int) -> tuple[int, int]:
    """Grid (cols, rows) for count tiles: cols = ceil(sqrt(n)), rows = ceil(n / cols).

    Raises:
        ValueError: If count < 1
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return cols, rows


def generate_contact_sheet(
    thumbnails: Sequence[ThumbnailArtifact],
    *,
    source_id: str,
    output_dir: Path,
    ffmpeg: FFmpegTool | None = None,
    timeout: float | None = ENGINE_TIMEOUT,
) -> Path:
    """Tile already-extracted thumbnails into a single image.

    Raises:
        ContactSheetError: If there are no thumbnails (the engine is not
            called) or compositing fails
    """
    if not thumbnails:
        raise ContactSheetError("No thumbnails to composite")

    cols, rows = compute_grid(len(thumbnails))
    ffmpeg = ffmpeg or FFmpegTool()
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / artifact_name("sheet", source_id, "jpg")

    result = ffmpeg.tile_images(
        image_paths=[t.file_path for t in thumbnails],
        output_path=output_path,
        cols=cols,
        rows=rows,
        timeout=timeout,
    )

    if not result.success or not output_path.exists():
        with contextlib.suppress(FileNotFoundError):
            output_path.unlink()
        raise ContactSheetError(
            f"Contact sheet compositing failed: {result.describe()}",
            stderr=result.stderr,
            details={"cols": cols, "rows": rows, "tiles": len(thumbnails)},
        )

    logger.info(f"Contact sheet generated ({cols}x{rows}): {output_path}")
    return output_path
