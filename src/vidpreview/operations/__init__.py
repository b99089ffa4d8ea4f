"""
Preview pipeline operations.
"""

from vidpreview.operations.clip import generate_preview_clip
from vidpreview.operations.contact_sheet import compute_grid, generate_contact_sheet
from vidpreview.operations.loop import generate_loop, loop_duration
from vidpreview.operations.probe import probe_video
from vidpreview.operations.processor import PreviewGenerator, generate_preview
from vidpreview.operations.retention import (
    RetentionScheduler,
    SweepReport,
    sweep,
    sweep_old_artifacts,
)
from vidpreview.operations.schedule import build_thumbnail_specs, compute_offsets
from vidpreview.operations.thumbnails import extract_thumbnail, generate_thumbnails

__all__ = [
    "PreviewGenerator",
    "RetentionScheduler",
    "SweepReport",
    "build_thumbnail_specs",
    "compute_grid",
    "compute_offsets",
    "extract_thumbnail",
    "generate_contact_sheet",
    "generate_loop",
    "generate_preview",
    "generate_preview_clip",
    "generate_thumbnails",
    "loop_duration",
    "probe_video",
    "sweep",
    "sweep_old_artifacts",
]
