"""
FFmpeg tool wrapper for still extraction, re-encoding, and compositing.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from vidpreview.config.defaults import ENGINE_TIMEOUT, THUMBNAIL_JPEG_QUALITY
from vidpreview.tools.base import MediaTool, ToolResult
from vidpreview.utils.system import find_tool

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class FFmpegTool(MediaTool):
    """Wrapper for FFmpeg video processing tool."""

    @property
    def name(self) -> str:
        return "ffmpeg"

    def is_available(self) -> bool:
        """Check if ffmpeg is installed."""
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
        """Get path to ffmpeg executable."""
        return find_tool("ffmpeg", env_var="VIDPREVIEW_FFMPEG")

    def _run(
        self,
        args: list[str],
        timeout: float | None = ENGINE_TIMEOUT,
    ) -> ToolResult:
        """Run ffmpeg with given arguments.

        subprocess.run kills the child when the timeout expires.
        """
        cmd = [self.get_path(), "-hide_banner", "-nostdin"] + args
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
                "ffmpeg not found. Install ffmpeg or set VIDPREVIEW_FFMPEG"
            )
        except OSError as e:
            return ToolResult.from_error(str(e))

    def extract_frame(
        self,
        video_path: Path,
        output_path: Path,
        timestamp: float,
        width: int,
        height: int,
        jpeg_quality: int = THUMBNAIL_JPEG_QUALITY,
        timeout: float | None = ENGINE_TIMEOUT,
    ) -> ToolResult:
        """Extract a single frame from video.

        Seeking past the end of the file makes ffmpeg exit cleanly without
        writing anything, so callers must check the output exists.

        Args:
            video_path: Path to video file
            output_path: Output JPEG path
            timestamp: Time in seconds
            width: Frame width
            height: Frame height
            jpeg_quality: JPEG quality (2=best, 31=worst)
            timeout: Seconds before the subprocess is killed
        """
        args = [
            "-ss", str(timestamp),
            "-i", str(video_path),
            "-frames:v", "1",
            "-vf", f"scale={width}:{height}",
            "-q:v", str(jpeg_quality),
            "-y",
            str(output_path),
        ]
        return self._run(args, timeout=timeout)

    def encode_clip(
        self,
        video_path: Path,
        output_path: Path,
        duration: float,
        bitrate: str,
        width: int,
        height: int,
        timeout: float | None = ENGINE_TIMEOUT,
    ) -> ToolResult:
        """Re-encode the leading segment of a video at reduced quality.

        Args:
            video_path: Path to video file
            output_path: Output MP4 path
            duration: Seconds to keep, starting at 0
            bitrate: Target video bitrate (e.g. "1000k")
            width: Output width
            height: Output height
            timeout: Seconds before the subprocess is killed
        """
        args = [
            "-ss", "0",
            "-i", str(video_path),
            "-t", str(duration),
            "-c:v", "libx264",
            "-b:v", bitrate,
            "-vf", f"scale={width}:{height}",
            "-preset", "fast",
            "-crf", "23",
            "-movflags", "+faststart",
            "-y",
            str(output_path),
        ]
        return self._run(args, timeout=timeout)

    def encode_loop(
        self,
        video_path: Path,
        output_path: Path,
        duration: float,
        width: int,
        height: int,
        fps: int,
        timeout: float | None = ENGINE_TIMEOUT,
    ) -> ToolResult:
        """Encode the leading segment as an endlessly looping GIF.

        Args:
            video_path: Path to video file
            output_path: Output GIF path
            duration: Seconds to keep, starting at 0
            width: Output width
            height: Output height
            fps: Output frame rate
            timeout: Seconds before the subprocess is killed
        """
        args = [
            "-ss", "0",
            "-i", str(video_path),
            "-t", str(duration),
            "-vf", f"scale={width}:{height}:flags=lanczos,fps={fps}",
            "-an",
            "-loop", "0",
            "-y",
            str(output_path),
        ]
        return self._run(args, timeout=timeout)

    def tile_images(
        self,
        image_paths: list[Path],
        output_path: Path,
        cols: int,
        rows: int,
        timeout: float | None = ENGINE_TIMEOUT,
    ) -> ToolResult:
        """Composite still images into one grid image.

        Each input is a single-frame stream; they are concatenated in order
        and laid out left-to-right, top-to-bottom by the tile filter. Inputs
        must share the same dimensions.

        Args:
            image_paths: Ordered still images
            output_path: Output image path
            cols: Grid columns
            rows: Grid rows
            timeout: Seconds before the subprocess is killed
        """
        args: list[str] = []
        for path in image_paths:
            args += ["-i", str(path)]

        labels = "".join(f"[{i}:v]" for i in range(len(image_paths)))
        filter_graph = (
            f"{labels}concat=n={len(image_paths)}:v=1:a=0,"
            f"tile={cols}x{rows}[out]"
        )
        args += [
            "-filter_complex", filter_graph,
            "-map", "[out]",
            "-frames:v", "1",
            "-q:v", str(THUMBNAIL_JPEG_QUALITY),
            "-y",
            str(output_path),
        ]
        return self._run(args, timeout=timeout)
