"""
vidpreview - fast visual summaries of video files.

Derive preview artifacts from a single source video:
1. Probe duration and resolution (ffprobe)
2. Sample thumbnails on an evenly spaced schedule
3. Encode a short preview clip and an animated loop
4. Optionally tile the thumbnails into a contact sheet
5. Sweep stale artifacts on a retention schedule
"""

# Config
from vidpreview.config.quality import CLIP_QUALITY_LADDER, CLIP_QUALITY_PRESETS

# Exceptions
from vidpreview.exceptions import (
    ClipGenerationError,
    ContactSheetError,
    LoopGenerationError,
    PipelineStateError,
    ProbeError,
    RecordError,
    StageError,
    SweepIOError,
    ThumbnailError,
    ToolNotFoundError,
    VidpreviewError,
)

# Models
from vidpreview.models import (
    BundleMetadata,
    PipelineState,
    PreviewBundle,
    PreviewOptions,
    RetentionPolicy,
    ThumbnailArtifact,
    ThumbnailSize,
    ThumbnailSpec,
    VideoMetadata,
)

# Core processing functions
from vidpreview.operations.processor import PreviewGenerator, generate_preview
from vidpreview.operations.retention import (
    RetentionScheduler,
    sweep,
    sweep_old_artifacts,
)
from vidpreview.operations.schedule import compute_offsets
from vidpreview.storage.layout import OutputLayout

__version__ = "0.1.0"

__all__ = [
    # Core functions
    "generate_preview",
    "PreviewGenerator",
    "compute_offsets",
    "sweep",
    "sweep_old_artifacts",
    "RetentionScheduler",
    "OutputLayout",
    # Models
    "BundleMetadata",
    "PipelineState",
    "PreviewBundle",
    "PreviewOptions",
    "RetentionPolicy",
    "ThumbnailArtifact",
    "ThumbnailSize",
    "ThumbnailSpec",
    "VideoMetadata",
    # Config
    "CLIP_QUALITY_PRESETS",
    "CLIP_QUALITY_LADDER",
    # Exceptions
    "VidpreviewError",
    "ProbeError",
    "StageError",
    "ThumbnailError",
    "ClipGenerationError",
    "LoopGenerationError",
    "ContactSheetError",
    "SweepIOError",
    "ToolNotFoundError",
    "PipelineStateError",
    "RecordError",
]
