"""
Output directory layout for generated preview artifacts.

    {thumbnail_dir}/                  stills
    {preview_dir}/videos/             preview clips
    {preview_dir}/gifs/               animated loops
    {preview_dir}/sprites/            contact sheets
    {preview_dir}/records/            bundle records (JSON)
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path

from vidpreview.config.loader import PreviewConfig, get_config
from vidpreview.utils.formatting import sanitize_id

logger = logging.getLogger(__name__)


class OutputLayout:
    """Resolves where each kind of artifact is written."""

    def __init__(self, preview_dir: Path, thumbnail_dir: Path):
        self.preview_dir = Path(preview_dir)
        self.thumbnail_dir = Path(thumbnail_dir)

    @classmethod
    def from_config(cls, config: PreviewConfig | None = None) -> OutputLayout:
        config = config or get_config()
        return cls(config.preview_dir, config.thumbnail_dir)

    @property
    def thumbnails_dir(self) -> Path:
        return self.thumbnail_dir

    @property
    def videos_dir(self) -> Path:
        return self.preview_dir / "videos"

    @property
    def gifs_dir(self) -> Path:
        return self.preview_dir / "gifs"

    @property
    def sprites_dir(self) -> Path:
        return self.preview_dir / "sprites"

    @property
    def records_dir(self) -> Path:
        return self.preview_dir / "records"

    def retention_directories(self) -> list[Path]:
        """Every directory the retention sweeper scans."""
        return [
            self.thumbnails_dir,
            self.gifs_dir,
            self.sprites_dir,
            self.videos_dir,
            self.records_dir,
        ]

    def ensure_directories(self) -> None:
        """Create all output directories if absent."""
        for directory in self.retention_directories():
            directory.mkdir(parents=True, exist_ok=True)

    def __repr__(self) -> str:
        return (
            f"OutputLayout(preview_dir={self.preview_dir!r}, "
            f"thumbnail_dir={self.thumbnail_dir!r})"
        )


def artifact_name(
    prefix: str,
    source_id: str,
    ext: str,
    index: int | None = None,
) -> str:
    """Build a unique artifact filename.

    Embeds the sanitized source id and a millisecond timestamp, plus a short
    random suffix so concurrent runs on the same source never collide.

    Example: thumb_video42_3_1718000000000_a1b2c3.jpg
    """
    parts = [prefix, sanitize_id(source_id)]
    if index is not None:
        parts.append(str(index))
    parts.append(str(int(time.time() * 1000)))
    parts.append(uuid.uuid4().hex[:6])
    return "_".join(parts) + f".{ext.lstrip('.')}"
