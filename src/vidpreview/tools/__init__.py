"""
Media engine wrappers for vidpreview.

Provides clean interfaces to ffmpeg and ffprobe.
"""

from vidpreview.tools.base import MediaTool, ToolResult
from vidpreview.tools.ffmpeg import FFmpegTool
from vidpreview.tools.ffprobe import FFprobeTool

__all__ = [
    "MediaTool",
    "ToolResult",
    "FFmpegTool",
    "FFprobeTool",
]
