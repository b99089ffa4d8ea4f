"""
Sampling schedule for thumbnails.
"""

from __future__ import annotations

import math

from vidpreview.models.bundle import ThumbnailSpec


def compute_offsets(duration: float, count: int) -> list[float]:
    """Evenly spaced sample offsets in seconds.

    interval = max(1, floor(duration / (count + 1))), offsets are
    interval, 2*interval, ..., count*interval. The +1 keeps the last sample
    off the very end of the file. Short, zero or negative durations fall back
    to one-second spacing, so later offsets may lie past the end; those
    samples fail individually at extraction time.

    Args:
        duration: Source duration in seconds
        count: Number of samples

    Returns:
        Strictly increasing offsets, empty when count is 0

    Raises:
        ValueError: If count is negative
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if count == 0:
        return []

    interval = max(1, math.floor(max(duration, 0.0) / (count + 1)))
    return [float(i * interval) for i in range(1, count + 1)]


def build_thumbnail_specs(
    duration: float,
    count: int,
    width: int,
    height: int,
) -> list[ThumbnailSpec]:
    """One ThumbnailSpec per scheduled offset, indexed from 1."""
    return [
        ThumbnailSpec(
            index=i,
            time_offset_seconds=offset,
            target_width=width,
            target_height=height,
        )
        for i, offset in enumerate(compute_offsets(duration, count), start=1)
    ]
