"""Pure formatting of playlist listings."""

from __future__ import annotations

from bdtool.core.models import CLOCK_RATE, TitleSummary


def format_duration(ticks: int) -> str:
    """Render a tick count as ``HH:MM:SS`` (truncating fractions)."""
    seconds = ticks // CLOCK_RATE
    return f"{seconds // 3600:02d}:{seconds // 60 % 60:02d}:{seconds % 60:02d}"


def format_title_summary(summary: TitleSummary) -> str:
    """Render one listing row.

    Example::

        00800    length: 01:52:07    clips:   1    chapters:  24    angles:  1
    """
    return (
        f"{summary.playlist_id.mpls_name}    "
        f"length: {format_duration(summary.duration)}    "
        f"clips: {summary.clip_count:3d}    "
        f"chapters: {summary.chapter_count:3d}    "
        f"angles: {summary.angle_count:2d}"
    )
