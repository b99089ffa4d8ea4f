"""Tests for the clip, loop, and contact sheet stages."""

import math

import pytest

from fakes import FakeFFmpeg
from vidpreview.config.quality import CLIP_QUALITY_LADDER, CLIP_QUALITY_PRESETS, get_clip_preset
from vidpreview.exceptions import ClipGenerationError, ContactSheetError, LoopGenerationError
from vidpreview.models.bundle import ThumbnailArtifact
from vidpreview.operations.clip import generate_preview_clip
from vidpreview.operations.contact_sheet import compute_grid, generate_contact_sheet
from vidpreview.operations.loop import generate_loop, loop_duration


class TestClipQualityPresets:
    """Tests for clip quality presets."""

    def test_all_presets_defined(self):
        for name in ["low", "medium", "high"]:
            assert name in CLIP_QUALITY_PRESETS

    def test_resolution_increases_with_quality(self):
        widths = [CLIP_QUALITY_PRESETS[q]["width"] for q in CLIP_QUALITY_LADDER]
        assert widths == sorted(widths)

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Invalid quality 'ultra'"):
            get_clip_preset("ultra")


class TestGeneratePreviewClip:
    """Tests for generate_preview_clip."""

    def test_uses_preset(self, fake_video, tmp_path):
        ffmpeg = FakeFFmpeg()
        path = generate_preview_clip(
            fake_video, source_id="v", output_dir=tmp_path,
            duration_seconds=10, quality="high", ffmpeg=ffmpeg,
        )
        assert path.exists()
        assert path.suffix == ".mp4"
        assert ffmpeg.clip_calls == [
            {"duration": 10, "bitrate": "2000k", "width": 1280, "height": 720}
        ]

    def test_engine_failure_raises(self, fake_video, tmp_path):
        with pytest.raises(ClipGenerationError, match="libx264") as exc_info:
            generate_preview_clip(
                fake_video, source_id="v", output_dir=tmp_path,
                ffmpeg=FakeFFmpeg(fail_clip=True),
            )
        assert exc_info.value.to_dict()["stage"] == "clip"
        assert list(tmp_path.glob("preview_*")) == []


class TestLoop:
    """Tests for the animated loop stage."""

    @pytest.mark.parametrize(
        "source,expected",
        [(60, 5.0), (25, 5.0), (20, 4.0), (10, 2.0), (0, 0.0)],
    )
    def test_loop_duration(self, source, expected):
        assert loop_duration(source) == pytest.approx(expected)

    def test_generates_gif(self, fake_video, tmp_path):
        ffmpeg = FakeFFmpeg()
        path = generate_loop(
            fake_video, source_id="v", output_dir=tmp_path, source_duration=60, ffmpeg=ffmpeg
        )
        assert path.exists()
        assert path.suffix == ".gif"
        assert ffmpeg.loop_calls == [{"duration": 5.0, "width": 320, "height": 240, "fps": 10}]

    def test_zero_duration_skips_engine(self, fake_video, tmp_path):
        ffmpeg = FakeFFmpeg()
        with pytest.raises(LoopGenerationError):
            generate_loop(
                fake_video, source_id="v", output_dir=tmp_path, source_duration=0, ffmpeg=ffmpeg
            )
        assert ffmpeg.loop_calls == []

    def test_engine_failure_raises(self, fake_video, tmp_path):
        with pytest.raises(LoopGenerationError):
            generate_loop(
                fake_video, source_id="v", output_dir=tmp_path, source_duration=60,
                ffmpeg=FakeFFmpeg(fail_loop=True),
            )


def _thumbs(tmp_path, n):
    thumbs = []
    for i in range(n):
        path = tmp_path / f"t{i}.jpg"
        path.write_bytes(b"jpg")
        thumbs.append(
            ThumbnailArtifact(
                file_path=path, time_offset_seconds=float(i + 1),
                width=320, height=240, file_size_bytes=3,
            )
        )
    return thumbs


class TestContactSheet:
    """Tests for contact sheet compositing."""

    @pytest.mark.parametrize(
        "n,grid",
        [(1, (1, 1)), (2, (2, 1)), (3, (2, 2)), (4, (2, 2)), (5, (3, 2)), (6, (3, 2)),
         (9, (3, 3)), (10, (4, 3))],
    )
    def test_compute_grid(self, n, grid):
        assert compute_grid(n) == grid

    @pytest.mark.parametrize("n", range(1, 40))
    def test_grid_holds_every_tile(self, n):
        cols, rows = compute_grid(n)
        assert cols * rows >= n
        assert cols == math.ceil(math.sqrt(n))

    def test_compute_grid_rejects_zero(self):
        with pytest.raises(ValueError):
            compute_grid(0)

    def test_generates_sheet(self, tmp_path):
        ffmpeg = FakeFFmpeg()
        thumbs = _thumbs(tmp_path, 6)
        path = generate_contact_sheet(
            thumbs, source_id="v", output_dir=tmp_path / "sprites", ffmpeg=ffmpeg
        )
        assert path.exists()
        assert ffmpeg.tile_calls[0]["cols"] == 3
        assert ffmpeg.tile_calls[0]["rows"] == 2
        assert ffmpeg.tile_calls[0]["images"] == [t.file_path for t in thumbs]

    def test_no_thumbnails_skips_engine(self, tmp_path):
        ffmpeg = FakeFFmpeg()
        with pytest.raises(ContactSheetError, match="No thumbnails"):
            generate_contact_sheet([], source_id="v", output_dir=tmp_path, ffmpeg=ffmpeg)
        assert ffmpeg.tile_calls == []

    def test_engine_failure_raises(self, tmp_path):
        with pytest.raises(ContactSheetError, match="compositing failed"):
            generate_contact_sheet(
                _thumbs(tmp_path, 2), source_id="v", output_dir=tmp_path,
                ffmpeg=FakeFFmpeg(fail_tile=True),
            )
