"""
Data models for vidpreview.
"""

from vidpreview.models.bundle import (
    BundleMetadata,
    PreviewBundle,
    ThumbnailArtifact,
    ThumbnailSpec,
)
from vidpreview.models.metadata import VideoMetadata
from vidpreview.models.options import PreviewOptions, RetentionPolicy, ThumbnailSize
from vidpreview.models.state import PipelineState, StageOutcome

__all__ = [
    "BundleMetadata",
    "PipelineState",
    "PreviewBundle",
    "PreviewOptions",
    "RetentionPolicy",
    "StageOutcome",
    "ThumbnailArtifact",
    "ThumbnailSize",
    "ThumbnailSpec",
    "VideoMetadata",
]
