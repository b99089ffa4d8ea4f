"""
VideoMetadata dataclass for probed source properties.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class VideoMetadata:
    """Duration, resolution and size of a source video.

    Produced once per run by the prober and read-only afterward.
    """

    duration_seconds: float
    width: int
    height: int
    file_size_bytes: int

    def __post_init__(self):
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds must be >= 0, got {self.duration_seconds}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid resolution {self.width}x{self.height}")

    @property
    def resolution(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def resolution_label(self) -> str:
        return f"{self.width}x{self.height}"
