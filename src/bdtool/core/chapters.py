"""Render a playlist's chapters as an ffmpeg FFMETADATA file.

Chapters are emitted in metadata order with no reordering, merging or
overlap checks.
"""

from __future__ import annotations

from bdtool.core.buffer import GrowableBuffer
from bdtool.core.models import CLOCK_RATE, PlaylistMetadata

FFMETADATA_HEADER: str = ";FFMETADATA\n\n"


def format_chapters(metadata: PlaylistMetadata) -> str:
    """Return the FFMETADATA text for *metadata*'s chapter table."""
    buf = GrowableBuffer()
    buf.append_text(FFMETADATA_HEADER)
    for chapter in metadata.chapters:
        buf.append_text("[CHAPTER]\n")
        buf.append_formatted("TIMEBASE=1/{}\n", CLOCK_RATE)
        buf.append_formatted("START={}\n", chapter.start)
        buf.append_formatted("END={}\n", chapter.end)
        buf.append_text("\n")
    return buf.text()
