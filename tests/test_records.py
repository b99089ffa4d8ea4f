"""Tests for output layout and bundle records."""

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from vidpreview.exceptions import RecordError
from vidpreview.models.bundle import BundleMetadata, PreviewBundle, ThumbnailArtifact
from vidpreview.storage.layout import OutputLayout, artifact_name
from vidpreview.storage.records import find_latest_bundle, load_bundle, save_bundle


def _bundle(tmp_path, source_id="vid", created_at=None, bundle_id="preview_vid_1"):
    thumb_path = tmp_path / f"{bundle_id}_thumb.jpg"
    thumb_path.write_bytes(b"jpg")
    loop_path = tmp_path / f"{bundle_id}.gif"
    loop_path.write_bytes(b"gif")
    return PreviewBundle(
        id=bundle_id,
        source_id=source_id,
        source_path=Path("/videos/source.mp4"),
        metadata=BundleMetadata(
            duration_seconds=60.0,
            resolution="1280x720",
            file_size_bytes=1000,
            thumbnail_count=6,
            thumbnails_generated=1,
        ),
        thumbnails=(
            ThumbnailArtifact(
                file_path=thumb_path, time_offset_seconds=8.0,
                width=320, height=240, file_size_bytes=3,
            ),
        ),
        loop_path=loop_path,
        created_at=created_at or datetime.now(timezone.utc),
        stage_errors={"clip": "Unknown encoder"},
    )


class TestOutputLayout:
    """Tests for OutputLayout."""

    def test_directory_scheme(self, tmp_path):
        layout = OutputLayout(tmp_path / "previews", tmp_path / "thumbnails")
        assert layout.videos_dir == tmp_path / "previews" / "videos"
        assert layout.gifs_dir == tmp_path / "previews" / "gifs"
        assert layout.sprites_dir == tmp_path / "previews" / "sprites"
        assert layout.thumbnails_dir == tmp_path / "thumbnails"

    def test_ensure_directories(self, tmp_path):
        layout = OutputLayout(tmp_path / "previews", tmp_path / "thumbnails")
        layout.ensure_directories()
        assert all(d.is_dir() for d in layout.retention_directories())

    def test_artifact_names_unique(self):
        names = {artifact_name("thumb", "vid", "jpg", index=1) for _ in range(50)}
        assert len(names) == 50

    def test_artifact_name_embeds_id_and_timestamp(self):
        name = artifact_name("preview", "my/video id", "mp4")
        assert re.fullmatch(r"preview_my_video_id_\d{13}_[0-9a-f]{6}\.mp4", name)


class TestRecords:
    """Tests for save/load/find of bundle records."""

    def test_round_trip(self, tmp_path):
        bundle = _bundle(tmp_path)
        record = save_bundle(bundle, tmp_path / "records")
        assert record.name == "preview_vid_1.json"
        assert load_bundle(record) == bundle

    def test_load_corrupt_raises(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        with pytest.raises(RecordError, match="Invalid record"):
            load_bundle(bad)

    def test_load_incomplete_raises(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"id": "x"}')
        with pytest.raises(RecordError):
            load_bundle(bad)

    def test_find_latest(self, tmp_path):
        records = tmp_path / "records"
        earlier = datetime.now(timezone.utc) - timedelta(hours=1)
        save_bundle(_bundle(tmp_path, created_at=earlier, bundle_id="a"), records)
        newest = _bundle(tmp_path, bundle_id="b")
        save_bundle(newest, records)
        save_bundle(_bundle(tmp_path, source_id="other", bundle_id="c"), records)

        assert find_latest_bundle("vid", records).id == "b"

    def test_find_missing_returns_none(self, tmp_path):
        assert find_latest_bundle("vid", tmp_path / "records") is None
        (tmp_path / "records").mkdir()
        assert find_latest_bundle("vid", tmp_path / "records") is None

    def test_find_skips_corrupt_records(self, tmp_path):
        records = tmp_path / "records"
        save_bundle(_bundle(tmp_path), records)
        (records / "zzz.json").write_text("garbage")
        assert find_latest_bundle("vid", records).id == "preview_vid_1"

    def test_find_drops_swept_files(self, tmp_path):
        records = tmp_path / "records"
        bundle = _bundle(tmp_path)
        save_bundle(bundle, records)
        bundle.thumbnails[0].file_path.unlink()

        found = find_latest_bundle("vid", records)

        assert found.thumbnails == ()
        assert found.metadata.thumbnails_generated == 0
        assert found.loop_path == bundle.loop_path
        assert all(p.exists() for p in found.artifact_paths())
