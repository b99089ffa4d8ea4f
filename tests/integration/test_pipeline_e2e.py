"""End-to-end pipeline tests against a real ffmpeg/ffprobe.

Run with: pytest tests/integration --run-integration

A short synthetic source is rendered with ffmpeg's testsrc filter, then the
full pipeline runs over it. Skips when either binary is missing.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import pytest

from vidpreview.models.options import PreviewOptions
from vidpreview.operations.probe import probe_video
from vidpreview.operations.processor import PreviewGenerator
from vidpreview.operations.retention import sweep_old_artifacts
from vidpreview.storage.records import find_latest_bundle
from vidpreview.tools.ffmpeg import FFmpegTool
from vidpreview.tools.ffprobe import FFprobeTool

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = pytest.mark.integration


def _require_engines():
    if not (FFmpegTool().is_available() and FFprobeTool().is_available()):
        pytest.skip("ffmpeg/ffprobe not installed")


def _render_testsrc(path: Path, seconds: int) -> Path:
    """Render a 640x360 test pattern with a sine tone."""
    ffmpeg = FFmpegTool().get_path()
    subprocess.run(
        [
            ffmpeg, "-hide_banner", "-loglevel", "error", "-y",
            "-f", "lavfi", "-i", f"testsrc=duration={seconds}:size=640x360:rate=25",
            "-f", "lavfi", "-i", f"sine=frequency=440:duration={seconds}",
            "-c:v", "libx264", "-pix_fmt", "yuv420p", "-c:a", "aac", "-shortest",
            str(path),
        ],
        check=True,
        capture_output=True,
        timeout=120,
    )
    return path


@pytest.fixture(scope="module")
def source_video(tmp_path_factory):
    _require_engines()
    return _render_testsrc(tmp_path_factory.mktemp("src") / "testsrc.mp4", 14)


class TestRealPipeline:
    """Full runs with the real engine."""

    def test_probe(self, source_video):
        metadata = probe_video(source_video)
        assert metadata.resolution == (640, 360)
        assert metadata.duration_seconds == pytest.approx(14, abs=0.5)
        assert metadata.file_size_bytes > 0

    def test_full_bundle(self, source_video, layout):
        generator = PreviewGenerator(layout)
        bundle = generator.generate(
            source_video,
            "testsrc",
            PreviewOptions(thumbnail_count=4, generate_contact_sheet=True),
        )

        assert [t.time_offset_seconds for t in bundle.thumbnails] == [2, 4, 6, 8]
        assert bundle.preview_clip_path is not None
        assert bundle.loop_path is not None
        assert bundle.contact_sheet_path is not None
        assert bundle.stage_errors == {}
        for path in bundle.artifact_paths():
            assert path.stat().st_size > 0
        assert bundle.loop_path.read_bytes()[:3] == b"GIF"
        assert bundle.contact_sheet_path.read_bytes()[:2] == b"\xff\xd8"

        assert find_latest_bundle("testsrc", layout.records_dir) == bundle

    def test_sheet_grid_dimensions(self, source_video, layout):
        generator = PreviewGenerator(layout)
        bundle = generator.generate(
            source_video,
            "grid",
            PreviewOptions(
                thumbnail_count=3,
                thumbnail_size={"width": 160, "height": 90},
                generate_loop=False,
                generate_contact_sheet=True,
            ),
        )
        sheet = probe_video(bundle.contact_sheet_path)
        # 3 tiles -> 2x2 grid
        assert sheet.resolution == (320, 180)

    def test_sweep_leaves_fresh_artifacts(self, source_video, layout):
        bundle = PreviewGenerator(layout).generate(source_video, "sweep")
        report = sweep_old_artifacts(7, layout)
        assert report.deleted == []
        assert all(p.exists() for p in bundle.artifact_paths())
