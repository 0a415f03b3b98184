"""Tests for listing rows (core/listing.py)."""

from __future__ import annotations

import pytest

from bdtool.core.listing import format_duration, format_title_summary
from bdtool.core.models import CLOCK_RATE, PlaylistIdentifier, TitleSummary


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "00:00:00"),
            (59, "00:00:59"),
            (61, "00:01:01"),
            (3600, "01:00:00"),
            (6727, "01:52:07"),
            (100 * 3600, "100:00:00"),
        ],
    )
    def test_whole_seconds(self, seconds: int, expected: str) -> None:
        assert format_duration(seconds * CLOCK_RATE) == expected

    def test_fractions_truncate(self) -> None:
        assert format_duration(2 * CLOCK_RATE - 1) == "00:00:01"


class TestFormatTitleSummary:
    def test_row_layout(self) -> None:
        summary = TitleSummary(
            playlist_id=PlaylistIdentifier(800),
            duration=6727 * CLOCK_RATE,
            clip_count=1,
            chapter_count=24,
            angle_count=1,
        )
        assert format_title_summary(summary) == (
            "00800    length: 01:52:07    clips:   1    chapters:  24    angles:  1"
        )

    def test_wide_values_are_not_truncated(self) -> None:
        summary = TitleSummary(
            playlist_id=PlaylistIdentifier(123456),
            duration=0,
            clip_count=1234,
            chapter_count=999,
            angle_count=9,
        )
        row = format_title_summary(summary)
        assert row.startswith("123456    ")
        assert "clips: 1234    " in row
        assert "chapters: 999    " in row
