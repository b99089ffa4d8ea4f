"""
FFprobe tool wrapper for extracting video metadata.
"""

from __future__ import annotations

import contextlib
import logging
import subprocess
from typing import TYPE_CHECKING

from vidpreview.config.defaults import PROBE_TIMEOUT
from vidpreview.tools.base import MediaTool, ToolResult
from vidpreview.utils.system import find_tool

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class FFprobeTool(MediaTool):
    """Wrapper for FFprobe video metadata extraction tool."""

    @property
    def name(self) -> str:
        return "ffprobe"

    def is_available(self) -> bool:
        """Check if ffprobe is installed."""
        try:
            result = subprocess.run(
                [self.get_path(), "-version"],
                capture_output=True,
                timeout=5,
            )
        except (OSError, subprocess.SubprocessError):
            return False
        return result.returncode == 0

    def get_path(self) -> str:
        """Get path to ffprobe executable."""
        return find_tool("ffprobe", env_var="VIDPREVIEW_FFPROBE")

    def _run_json(
        self,
        args: list[str],
        timeout: float | None = PROBE_TIMEOUT,
    ) -> ToolResult:
        """Run ffprobe with JSON output."""
        cmd = [self.get_path()] + args
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            return ToolResult(
                success=result.returncode == 0,
                stdout=result.stdout,
                stderr=result.stderr,
                returncode=result.returncode,
            )
        except subprocess.TimeoutExpired:
            return ToolResult.from_error(f"Timeout after {timeout}s", timed_out=True)
        except FileNotFoundError:
            return ToolResult.from_error(
                "ffprobe not found. Install ffmpeg or set VIDPREVIEW_FFPROBE"
            )
        except OSError as e:
            return ToolResult.from_error(str(e))

    def probe_raw(
        self,
        file_path: Path | str,
        timeout: float | None = PROBE_TIMEOUT,
    ) -> ToolResult:
        """Run ffprobe over format and streams, returning the raw result."""
        args = [
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(file_path),
        ]
        return self._run_json(args, timeout=timeout)

    @staticmethod
    def find_video_stream(probe_data: dict) -> dict | None:
        """Return the principal video stream from probe output.

        Attached pictures (cover art) are skipped, they carry no timeline.
        """
        for stream in probe_data.get("streams", []):
            if stream.get("codec_type") != "video":
                continue
            if stream.get("disposition", {}).get("attached_pic"):
                continue
            return stream
        return None

    @staticmethod
    def parse_duration(probe_data: dict, stream: dict | None = None) -> float:
        """Duration in seconds from format, then stream, else 0.0.

        Negative or non-numeric values are treated as 0.0.
        """
        candidates = [probe_data.get("format", {}).get("duration")]
        if stream is not None:
            candidates.append(stream.get("duration"))

        for value in candidates:
            if value is None:
                continue
            with contextlib.suppress(ValueError, TypeError):
                return max(0.0, float(value))
        return 0.0
