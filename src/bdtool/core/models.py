"""Domain models for bdtool.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are owned by whoever produced them (normally the
metadata provider); the core never mutates them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

CLOCK_RATE: int = 90_000
"""Ticks per second of every timestamp and duration in this package."""

MAX_PLAYLIST_ID: int = 0xFFFF_FFFF
"""Largest playlist number accepted (32-bit unsigned range)."""


# ---------------------------------------------------------------------------
# Playlist identifier
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PlaylistIdentifier:
    """Canonical numeric playlist identifier (``00800.mpls`` → 800)."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= MAX_PLAYLIST_ID:
            raise ValueError(f"playlist identifier out of range: {self.value}")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    @property
    def mpls_name(self) -> str:
        """Zero-padded file stem used on disc (``00001``)."""
        return f"{self.value:05d}"


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------

class StreamKind(enum.Enum):
    """Elementary stream category, valued by its ffmpeg stream specifier."""

    VIDEO = "v"
    AUDIO = "a"
    SUBTITLE = "s"

    @property
    def specifier(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class StreamDescriptor:
    """One elementary stream of a clip."""

    kind: StreamKind
    """Video, audio or subtitle (presentation graphics / text)."""

    pid: int
    """Transport-stream program identifier used to select the stream."""

    language: str | None
    """ISO 639-2 code (0–3 characters) or ``None`` when absent."""

    ordinal: int
    """Zero-based position among streams of the same kind."""

    def __post_init__(self) -> None:
        if self.language == "":
            object.__setattr__(self, "language", None)

    @property
    def has_language(self) -> bool:
        return self.language is not None


# ---------------------------------------------------------------------------
# Chapters
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ChapterEntry:
    """A chapter mark, in :data:`CLOCK_RATE` ticks."""

    start: int
    duration: int

    @property
    def end(self) -> int:
        return self.start + self.duration


# ---------------------------------------------------------------------------
# Playlist snapshot
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PlaylistMetadata:
    """Read-only snapshot of one playlist.

    Stream tuples describe the **first** clip only; later clips of the
    same playlist are expected to carry the same stream layout.
    """

    playlist_id: PlaylistIdentifier
    chapters: tuple[ChapterEntry, ...] = ()
    video_streams: tuple[StreamDescriptor, ...] = ()
    audio_streams: tuple[StreamDescriptor, ...] = ()
    subtitle_streams: tuple[StreamDescriptor, ...] = ()
    duration: int = 0
    clip_count: int = 1
    angle_count: int = 1

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TitleSummary:
    """One row of a playlist listing."""

    playlist_id: PlaylistIdentifier
    duration: int
    """Total duration in :data:`CLOCK_RATE` ticks."""

    clip_count: int
    chapter_count: int
    angle_count: int


@dataclass(frozen=True, slots=True)
class TitleSelector:
    """Which playlists a listing should include.

    With *relevant_only* set, short titles, titles that loop over the
    same clip and duplicates of an earlier title are skipped.
    """

    relevant_only: bool = False
    min_duration_seconds: int = 120
