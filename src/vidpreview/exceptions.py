"""
Custom exceptions for vidpreview.

All vidpreview exceptions inherit from VidpreviewError for easy catching.
"""

from __future__ import annotations

from typing import Any


class VidpreviewError(Exception):
    """Base exception for all vidpreview errors."""

    pass


class ProbeError(VidpreviewError):
    """The source could not be probed, or it has no video stream.

    This is the only error that escapes a preview run.

    Attributes:
        message: Human-readable error message
        source_path: Path of the file that failed to probe
        stderr: Engine stderr output for debugging
    """

    def __init__(
        self,
        message: str,
        *,
        source_path: str | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.source_path = source_path
        self.stderr = stderr


class StageError(VidpreviewError):
    """An optional artifact stage failed.

    Stage errors are caught at the stage boundary by the orchestrator and
    never reach the caller.

    Attributes:
        message: Human-readable error message
        stage: Stage name ("thumbnails", "clip", "loop", "contact_sheet")
        stderr: Engine stderr output for debugging
        details: Additional diagnostic information
    """

    stage = "unknown"

    def __init__(
        self,
        message: str,
        *,
        stderr: str = "",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.stderr = stderr
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for diagnostics."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "stage": self.stage,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ThumbnailError(StageError):
    """A single frame extraction failed."""

    stage = "thumbnails"


class ClipGenerationError(StageError):
    """Preview clip re-encode failed."""

    stage = "clip"


class LoopGenerationError(StageError):
    """Animated loop encode failed."""

    stage = "loop"


class ContactSheetError(StageError):
    """Contact sheet compositing failed."""

    stage = "contact_sheet"


class SweepIOError(VidpreviewError):
    """A file or directory could not be swept."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ToolNotFoundError(VidpreviewError):
    """Required external tool (ffmpeg, ffprobe) not found."""

    def __init__(self, tool_name: str, message: str | None = None):
        self.tool_name = tool_name
        msg = message or f"Required tool '{tool_name}' not found in PATH"
        super().__init__(msg)


class PipelineStateError(VidpreviewError):
    """Illegal pipeline state transition."""

    pass


class RecordError(VidpreviewError):
    """Error reading or writing a preview bundle record."""

    pass
