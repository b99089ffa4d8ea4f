"""
PreviewOptions Pydantic model for caller-supplied run options.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, Field

from vidpreview.config.defaults import (
    DEFAULT_CLIP_DURATION,
    DEFAULT_CLIP_QUALITY,
    DEFAULT_THUMBNAIL_COUNT,
    DEFAULT_THUMBNAIL_HEIGHT,
    DEFAULT_THUMBNAIL_WIDTH,
    RETENTION_DAYS,
    RETENTION_GRACE_SECONDS,
)

_SIZE_RE = re.compile(r"^\s*(\d+)\s*[xX:]\s*(\d+)\s*$")


class ThumbnailSize(BaseModel):
    """Target still dimensions in pixels."""

    width: int = Field(DEFAULT_THUMBNAIL_WIDTH, gt=0, description="Width in pixels")
    height: int = Field(DEFAULT_THUMBNAIL_HEIGHT, gt=0, description="Height in pixels")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str) -> ThumbnailSize:
        """Parse "WxH" (or "W:H") into a size.

        Raises:
            ValueError: If the string is not two positive integers
        """
        match = _SIZE_RE.match(value)
        if not match:
            raise ValueError(f"Invalid size '{value}', expected WIDTHxHEIGHT")
        return cls(width=int(match.group(1)), height=int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class PreviewOptions(BaseModel):
    """Options for one preview run, with defaults applied up front."""

    thumbnail_count: int = Field(
        DEFAULT_THUMBNAIL_COUNT, ge=0, description="Number of stills to sample"
    )
    thumbnail_size: ThumbnailSize = Field(
        default_factory=ThumbnailSize, description="Still dimensions"
    )
    clip_duration_seconds: int = Field(
        DEFAULT_CLIP_DURATION, gt=0, description="Preview clip length in seconds"
    )
    clip_quality: Literal["low", "medium", "high"] = Field(
        DEFAULT_CLIP_QUALITY, description="Preview clip quality preset"
    )
    generate_loop: bool = Field(True, description="Produce the animated loop")
    generate_contact_sheet: bool = Field(
        False, description="Composite stills into a contact sheet"
    )

    model_config = {"frozen": True, "extra": "forbid"}


@dataclass(frozen=True)
class RetentionPolicy:
    """Process-wide file retention settings."""

    max_age_days: int = RETENTION_DAYS
    min_age_seconds: float = RETENTION_GRACE_SECONDS

    def __post_init__(self):
        if self.max_age_days < 0:
            raise ValueError(f"max_age_days must be >= 0, got {self.max_age_days}")
