"""Tests for the thumbnail sampling schedule."""

import pytest

from vidpreview.operations.schedule import build_thumbnail_specs, compute_offsets


class TestComputeOffsets:
    """Tests for compute_offsets."""

    def test_sixty_second_source(self):
        """floor(60 / 7) = 8 second spacing."""
        assert compute_offsets(60, 6) == [8, 16, 24, 32, 40, 48]

    @pytest.mark.parametrize("duration", [0.5, 3, 59.9, 600, 7201.25])
    @pytest.mark.parametrize("count", [1, 2, 6, 25])
    def test_count_strictly_increasing_positive(self, duration, count):
        """Exactly count values, strictly increasing, all > 0."""
        offsets = compute_offsets(duration, count)
        assert len(offsets) == count
        assert all(o > 0 for o in offsets)
        assert all(a < b for a, b in zip(offsets, offsets[1:]))

    @pytest.mark.parametrize("duration", [0, 5, 3600])
    def test_zero_count_is_empty(self, duration):
        """count=0 yields an empty schedule regardless of duration."""
        assert compute_offsets(duration, 0) == []

    def test_zero_duration_falls_back_to_one_second(self):
        """Degenerate duration still yields one-second spacing."""
        assert compute_offsets(0, 4) == [1, 2, 3, 4]

    def test_negative_duration_falls_back_to_one_second(self):
        assert compute_offsets(-12.5, 3) == [1, 2, 3]

    def test_short_video_overshoots_end(self):
        """A 3s source with 6 samples schedules offsets past the end."""
        offsets = compute_offsets(3, 6)
        assert offsets == [1, 2, 3, 4, 5, 6]
        assert offsets[-1] > 3

    def test_last_offset_stays_before_end(self):
        """With enough duration the last sample is not at the very end."""
        offsets = compute_offsets(100, 4)
        assert offsets == [20, 40, 60, 80]
        assert offsets[-1] < 100

    def test_negative_count_raises(self):
        with pytest.raises(ValueError, match="count must be >= 0"):
            compute_offsets(60, -1)

    def test_returns_floats(self):
        assert all(isinstance(o, float) for o in compute_offsets(60, 3))


class TestBuildThumbnailSpecs:
    """Tests for build_thumbnail_specs."""

    def test_specs_carry_size_and_index(self):
        specs = build_thumbnail_specs(60, 3, 320, 240)
        assert [s.index for s in specs] == [1, 2, 3]
        assert [s.time_offset_seconds for s in specs] == [15, 30, 45]
        assert all(s.target_width == 320 and s.target_height == 240 for s in specs)

    def test_no_specs_for_zero_count(self):
        assert build_thumbnail_specs(60, 0, 320, 240) == []
