"""
Artifact and bundle dataclasses returned by a preview run.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from pathlib import Path

from vidpreview.models.metadata import VideoMetadata


@dataclass(frozen=True)
class ThumbnailSpec:
    """One scheduled sample point."""

    index: int
    time_offset_seconds: float
    target_width: int
    target_height: int


@dataclass(frozen=True)
class ThumbnailArtifact:
    """A successfully extracted still frame."""

    file_path: Path
    time_offset_seconds: float
    width: int
    height: int
    file_size_bytes: int

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "file_path": str(self.file_path),
            "time_offset_seconds": self.time_offset_seconds,
            "width": self.width,
            "height": self.height,
            "file_size_bytes": self.file_size_bytes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ThumbnailArtifact:
        """Create from dictionary."""
        return cls(
            file_path=Path(data["file_path"]),
            time_offset_seconds=float(data["time_offset_seconds"]),
            width=int(data["width"]),
            height=int(data["height"]),
            file_size_bytes=int(data["file_size_bytes"]),
        )


@dataclass(frozen=True)
class BundleMetadata:
    """Summary of the source and the run, carried on the bundle."""

    duration_seconds: float
    resolution: str
    file_size_bytes: int
    thumbnail_count: int
    thumbnails_generated: int

    @classmethod
    def from_video(
        cls,
        metadata: VideoMetadata,
        requested: int,
        generated: int,
    ) -> BundleMetadata:
        return cls(
            duration_seconds=metadata.duration_seconds,
            resolution=metadata.resolution_label,
            file_size_bytes=metadata.file_size_bytes,
            thumbnail_count=requested,
            thumbnails_generated=generated,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "duration_seconds": self.duration_seconds,
            "resolution": self.resolution,
            "file_size_bytes": self.file_size_bytes,
            "thumbnail_count": self.thumbnail_count,
            "thumbnails_generated": self.thumbnails_generated,
        }

    @classmethod
    def from_dict(cls, data: dict) -> BundleMetadata:
        """Create from dictionary."""
        return cls(
            duration_seconds=float(data["duration_seconds"]),
            resolution=data["resolution"],
            file_size_bytes=int(data["file_size_bytes"]),
            thumbnail_count=int(data["thumbnail_count"]),
            thumbnails_generated=int(data.get("thumbnails_generated", 0)),
        )


@dataclass(frozen=True)
class PreviewBundle:
    """Aggregate result of one preview run.

    Optional paths are set only when the stage was requested and succeeded.
    stage_errors maps a failed stage name to the engine error message.
    """

    id: str
    source_id: str
    source_path: Path
    metadata: BundleMetadata
    thumbnails: tuple[ThumbnailArtifact, ...] = ()
    preview_clip_path: Path | None = None
    loop_path: Path | None = None
    contact_sheet_path: Path | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stage_errors: dict[str, str] = field(default_factory=dict)

    def artifact_paths(self) -> list[Path]:
        """Every file path referenced by this bundle."""
        paths = [t.file_path for t in self.thumbnails]
        for optional in (self.preview_clip_path, self.loop_path, self.contact_sheet_path):
            if optional is not None:
                paths.append(optional)
        return paths

    def without_missing_files(self) -> PreviewBundle:
        """Copy of this bundle with references to vanished files dropped."""
        thumbnails = tuple(t for t in self.thumbnails if t.file_path.exists())

        def _keep(path: Path | None) -> Path | None:
            return path if path is not None and path.exists() else None

        return replace(
            self,
            thumbnails=thumbnails,
            preview_clip_path=_keep(self.preview_clip_path),
            loop_path=_keep(self.loop_path),
            contact_sheet_path=_keep(self.contact_sheet_path),
            metadata=replace(self.metadata, thumbnails_generated=len(thumbnails)),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""

        def _str(path: Path | None) -> str | None:
            return str(path) if path is not None else None

        return {
            "id": self.id,
            "source_id": self.source_id,
            "source_path": str(self.source_path),
            "thumbnails": [t.to_dict() for t in self.thumbnails],
            "preview_clip_path": _str(self.preview_clip_path),
            "loop_path": _str(self.loop_path),
            "contact_sheet_path": _str(self.contact_sheet_path),
            "metadata": self.metadata.to_dict(),
            "created_at": self.created_at.isoformat(),
            "stage_errors": dict(self.stage_errors),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PreviewBundle:
        """Create from dictionary."""

        def _path(value: str | None) -> Path | None:
            return Path(value) if value else None

        return cls(
            id=data["id"],
            source_id=data["source_id"],
            source_path=Path(data["source_path"]),
            metadata=BundleMetadata.from_dict(data["metadata"]),
            thumbnails=tuple(
                ThumbnailArtifact.from_dict(t) for t in data.get("thumbnails", [])
            ),
            preview_clip_path=_path(data.get("preview_clip_path")),
            loop_path=_path(data.get("loop_path")),
            contact_sheet_path=_path(data.get("contact_sheet_path")),
            created_at=datetime.fromisoformat(data["created_at"]),
            stage_errors=dict(data.get("stage_errors", {})),
        )
