"""MPLS backed implementation of :class:`~bdtool.core.protocols.MetadataProvider`.

Reads playlist files from a mounted disc (``ROOT/BDMV/PLAYLIST``) and
converts them into domain models the way libbluray reports title
information:

* durations and chapter times in 90 kHz ticks,
* chapters from *entry* marks only, each lasting until the next entry
  mark or the end of the title,
* streams from the STN table of the first play item.

This module is the **only** place that touches playlist files.  OS and
parse failures are re-raised as :class:`~bdtool.exceptions.BdtoolError`
subclasses.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from pathlib import Path

from bdtool.core.models import (
    CLOCK_RATE,
    ChapterEntry,
    PlaylistIdentifier,
    PlaylistMetadata,
    StreamDescriptor,
    StreamKind,
    TitleSelector,
    TitleSummary,
)
from bdtool.exceptions import BdtoolError, DiscOpenError, MetadataReadError, PlaylistNotFoundError
from bdtool.infra.mpls_parser import (
    MARK_TYPE_ENTRY,
    MPLS_CLOCK_RATE,
    MplsPlaylist,
    MplsStream,
    parse_mpls,
)

PLAYLIST_DIR: tuple[str, str] = ("BDMV", "PLAYLIST")

# A clip appearing more often than this marks a looping menu/filler title.
MAX_CLIP_REPEATS: int = 2

_TICK_SCALE: int = CLOCK_RATE // MPLS_CLOCK_RATE

SkipCallback = Callable[[str, BdtoolError], None]


class MplsMetadataProvider:
    """Concrete :class:`MetadataProvider` over a mounted disc directory.

    Parameters
    ----------
    root:
        Directory where the disc is mounted (the one containing ``BDMV``).
    on_skip:
        Optional callable invoked with the file name and the error for
        every playlist skipped while building a listing.

    Raises
    ------
    DiscOpenError
        When *root* has no ``BDMV/PLAYLIST`` directory.
    """

    def __init__(self, root: str | Path, *, on_skip: SkipCallback | None = None) -> None:
        self._root = Path(root)
        self._playlist_dir = self._root.joinpath(*PLAYLIST_DIR)
        self._on_skip = on_skip
        if not self._playlist_dir.is_dir():
            raise DiscOpenError(
                f"could not open {root}",
                hint="BD-ROOT must be the directory where the disc is mounted (containing BDMV/).",
            )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_playlist_metadata(self, playlist_id: PlaylistIdentifier) -> PlaylistMetadata:
        """Read and convert ``NNNNN.mpls``.

        Raises
        ------
        PlaylistNotFoundError
            When the playlist file does not exist.
        MetadataReadError
            When the file cannot be read or parsed.
        """
        return self._to_metadata(playlist_id, self._load(playlist_id))

    def get_title_summaries(self, selector: TitleSelector) -> list[TitleSummary]:
        """Summarise every playlist on the disc, in file-name order."""
        summaries: list[TitleSummary] = []
        kept: list[MplsPlaylist] = []

        for path in sorted(self._playlist_dir.glob("*.mpls")):
            stem = path.stem
            if len(stem) != 5 or not stem.isascii() or not stem.isdigit():
                continue
            playlist_id = PlaylistIdentifier(int(stem))
            try:
                playlist = self._load(playlist_id)
            except BdtoolError as exc:
                if self._on_skip is not None:
                    self._on_skip(path.name, exc)
                continue

            if selector.relevant_only and not _is_relevant(playlist, kept, selector):
                continue
            kept.append(playlist)
            summaries.append(self._to_summary(playlist_id, playlist))

        return summaries

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _load(self, playlist_id: PlaylistIdentifier) -> MplsPlaylist:
        path = self._playlist_dir / f"{playlist_id.mpls_name}.mpls"
        try:
            data = path.read_bytes()
        except FileNotFoundError as exc:
            raise PlaylistNotFoundError(int(playlist_id)) from exc
        except OSError as exc:
            raise MetadataReadError(
                f"could not read {path}: {exc.strerror or exc}",
            ) from exc

        try:
            return parse_mpls(data)
        except MetadataReadError as exc:
            raise MetadataReadError(f"{path.name}: {exc}") from exc

    # ------------------------------------------------------------------
    # MPLS → domain conversion (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _to_metadata(playlist_id: PlaylistIdentifier, playlist: MplsPlaylist) -> PlaylistMetadata:
        first = playlist.play_items[0] if playlist.play_items else None
        return PlaylistMetadata(
            playlist_id=playlist_id,
            chapters=_chapters(playlist),
            video_streams=_descriptors(StreamKind.VIDEO, first.video_streams if first else ()),
            audio_streams=_descriptors(StreamKind.AUDIO, first.audio_streams if first else ()),
            subtitle_streams=_descriptors(
                StreamKind.SUBTITLE, first.subtitle_streams if first else ()
            ),
            duration=playlist.duration * _TICK_SCALE,
            clip_count=len(playlist.play_items),
            angle_count=_angle_count(playlist),
        )

    @staticmethod
    def _to_summary(playlist_id: PlaylistIdentifier, playlist: MplsPlaylist) -> TitleSummary:
        return TitleSummary(
            playlist_id=playlist_id,
            duration=playlist.duration * _TICK_SCALE,
            clip_count=len(playlist.play_items),
            chapter_count=len(_entry_title_times(playlist)),
            angle_count=_angle_count(playlist),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _descriptors(kind: StreamKind, streams: Sequence[MplsStream]) -> tuple[StreamDescriptor, ...]:
    return tuple(
        StreamDescriptor(kind=kind, pid=stream.pid, language=stream.language, ordinal=index)
        for index, stream in enumerate(streams)
    )


def _angle_count(playlist: MplsPlaylist) -> int:
    return max((item.angle_count for item in playlist.play_items), default=1)


def _entry_title_times(playlist: MplsPlaylist) -> list[int]:
    """Title-relative times (45 kHz) of the entry marks, in mark order."""
    item_starts: list[int] = []
    elapsed = 0
    for item in playlist.play_items:
        item_starts.append(elapsed)
        elapsed += item.duration

    times: list[int] = []
    for mark in playlist.marks:
        if mark.mark_type != MARK_TYPE_ENTRY or mark.play_item_ref >= len(playlist.play_items):
            continue
        item = playlist.play_items[mark.play_item_ref]
        offset = max(mark.timestamp - item.in_time, 0)
        times.append(item_starts[mark.play_item_ref] + offset)
    return times


def _chapters(playlist: MplsPlaylist) -> tuple[ChapterEntry, ...]:
    times = _entry_title_times(playlist)
    total = playlist.duration
    chapters: list[ChapterEntry] = []
    for index, start in enumerate(times):
        end = times[index + 1] if index + 1 < len(times) else total
        chapters.append(
            ChapterEntry(
                start=start * _TICK_SCALE,
                duration=max(end - start, 0) * _TICK_SCALE,
            )
        )
    return tuple(chapters)


def _clip_signature(playlist: MplsPlaylist) -> tuple[tuple[str, int, int], ...]:
    return tuple((item.clip_id, item.in_time, item.out_time) for item in playlist.play_items)


def _is_relevant(
    playlist: MplsPlaylist,
    kept: Sequence[MplsPlaylist],
    selector: TitleSelector,
) -> bool:
    """Apply the short-title, repeated-clip and duplicate-title filters."""
    if playlist.duration < selector.min_duration_seconds * MPLS_CLOCK_RATE:
        return False

    clip_counts = Counter(item.clip_id for item in playlist.play_items)
    if any(count > MAX_CLIP_REPEATS for count in clip_counts.values()):
        return False

    signature = _clip_signature(playlist)
    chapter_count = len(_entry_title_times(playlist))
    for other in kept:
        if _clip_signature(other) == signature and len(_entry_title_times(other)) == chapter_count:
            return False
    return True
