"""Engine fakes shared by the vidpreview tests."""

import json
from pathlib import Path

from vidpreview.tools.base import ToolResult
from vidpreview.tools.ffprobe import FFprobeTool


def probe_json(duration=60.0, width=1920, height=1080, with_video=True) -> str:
    """Build ffprobe-style JSON output."""
    streams = [{"codec_type": "audio", "codec_name": "aac"}]
    if with_video:
        streams.insert(
            0,
            {
                "codec_type": "video",
                "codec_name": "h264",
                "width": width,
                "height": height,
                "r_frame_rate": "30/1",
            },
        )
    data = {"format": {"duration": str(duration)}, "streams": streams}
    return json.dumps(data)


class FakeFFprobe:
    """Stands in for FFprobeTool, answering with canned JSON."""

    def __init__(self, duration=60.0, width=1920, height=1080, with_video=True, fail=False):
        self.duration = duration
        self.width = width
        self.height = height
        self.with_video = with_video
        self.fail = fail
        self.calls = []

    def probe_raw(self, file_path, timeout=None):
        self.calls.append(Path(file_path))
        if self.fail:
            return ToolResult(success=False, stderr="moov atom not found", returncode=1)
        return ToolResult.ok(
            stdout=probe_json(self.duration, self.width, self.height, self.with_video)
        )

    find_video_stream = staticmethod(FFprobeTool.find_video_stream)
    parse_duration = staticmethod(FFprobeTool.parse_duration)


class FakeFFmpeg:
    """Stands in for FFmpegTool, writing small files instead of encoding.

    Frames past source_duration produce no output, like the real engine.
    """

    def __init__(
        self,
        source_duration=60.0,
        fail_frames=False,
        fail_clip=False,
        fail_loop=False,
        fail_tile=False,
    ):
        self.source_duration = source_duration
        self.fail_frames = fail_frames
        self.fail_clip = fail_clip
        self.fail_loop = fail_loop
        self.fail_tile = fail_tile
        self.frame_calls = []
        self.clip_calls = []
        self.loop_calls = []
        self.tile_calls = []

    @staticmethod
    def _failed(message="Conversion failed!"):
        return ToolResult(success=False, stderr=message, returncode=1)

    def extract_frame(self, video_path, output_path, timestamp, width, height, **kwargs):
        self.frame_calls.append(timestamp)
        if self.fail_frames:
            return self._failed("Invalid data found when processing input")
        if timestamp < self.source_duration:
            output_path.write_bytes(b"\xff\xd8jpeg")
        return ToolResult.ok()

    def encode_clip(self, video_path, output_path, duration, bitrate, width, height, **kwargs):
        self.clip_calls.append(
            {"duration": duration, "bitrate": bitrate, "width": width, "height": height}
        )
        if self.fail_clip:
            return self._failed("Unknown encoder 'libx264'")
        output_path.write_bytes(b"mp4")
        return ToolResult.ok()

    def encode_loop(self, video_path, output_path, duration, width, height, fps, **kwargs):
        self.loop_calls.append(
            {"duration": duration, "width": width, "height": height, "fps": fps}
        )
        if self.fail_loop:
            return self._failed()
        output_path.write_bytes(b"GIF89a")
        return ToolResult.ok()

    def tile_images(self, image_paths, output_path, cols, rows, **kwargs):
        self.tile_calls.append({"images": list(image_paths), "cols": cols, "rows": rows})
        if self.fail_tile:
            return self._failed()
        output_path.write_bytes(b"\xff\xd8sheet")
        return ToolResult.ok()
