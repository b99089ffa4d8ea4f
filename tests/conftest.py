"""Pytest configuration for vidpreview tests."""

import pytest

from vidpreview.config.loader import clear_config_cache
from vidpreview.storage.layout import OutputLayout


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against a real ffmpeg/ffprobe",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's real config and output dirs."""
    monkeypatch.setenv("VIDPREVIEW_ROOT", str(tmp_path / "root"))
    for var in (
        "VIDPREVIEW_PREVIEW_DIR",
        "VIDPREVIEW_THUMBNAIL_DIR",
        "VIDPREVIEW_RETENTION_DAYS",
        "VIDPREVIEW_ENGINE_TIMEOUT",
        "VIDPREVIEW_THUMBNAIL_WORKERS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def fake_video(tmp_path):
    """Create a fake video file (just bytes, not actual video)."""
    video = tmp_path / "fake_video.mp4"
    video.write_bytes(b"fake video content" * 100)
    return video


@pytest.fixture
def layout(tmp_path):
    """Provide an output layout under tmp_path with directories created."""
    out = OutputLayout(tmp_path / "out" / "previews", tmp_path / "out" / "thumbnails")
    out.ensure_directories()
    return out
