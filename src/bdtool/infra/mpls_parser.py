"""Reader for Blu-ray movie playlist files (``BDMV/PLAYLIST/*.mpls``).

Only the parts needed for title information are decoded:

* header — section start addresses,
* PlayList — play items with clip name, IN/OUT time, angle count and
  the primary video / primary audio / PG+text subtitle entries of the
  STN table,
* PlayListMark — chapter and link marks.

Times are kept in the on-disc 45 kHz clock; conversion to the 90 kHz
clock of the domain models happens in the provider.  All multi-byte
fields are big-endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from bdtool.exceptions import MetadataReadError

MPLS_MAGIC: bytes = b"MPLS"
MPLS_CLOCK_RATE: int = 45_000

MARK_TYPE_ENTRY: int = 1
MARK_TYPE_LINK: int = 2

VIDEO_CODING_TYPES: frozenset[int] = frozenset({0x01, 0x02, 0x1B, 0x24, 0xEA})
AUDIO_CODING_TYPES: frozenset[int] = frozenset(
    {0x03, 0x04, 0x80, 0x81, 0x82, 0x83, 0x84, 0x85, 0x86, 0xA1, 0xA2}
)
GRAPHICS_CODING_TYPES: frozenset[int] = frozenset({0x90, 0x91})
TEXT_SUBTITLE_CODING_TYPE: int = 0x92

_HEADER = struct.Struct(">4s4sIII")
_MARK = struct.Struct(">BBHIHI")


# ---------------------------------------------------------------------------
# Parsed structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MplsStream:
    """One STN table entry."""

    coding_type: int
    pid: int
    language: str | None


@dataclass(frozen=True, slots=True)
class MplsPlayItem:
    clip_id: str
    in_time: int
    out_time: int
    angle_count: int
    video_streams: tuple[MplsStream, ...]
    audio_streams: tuple[MplsStream, ...]
    subtitle_streams: tuple[MplsStream, ...]

    @property
    def duration(self) -> int:
        return max(self.out_time - self.in_time, 0)


@dataclass(frozen=True, slots=True)
class MplsMark:
    mark_type: int
    play_item_ref: int
    timestamp: int
    duration: int


@dataclass(frozen=True, slots=True)
class MplsPlaylist:
    version: str
    play_items: tuple[MplsPlayItem, ...]
    marks: tuple[MplsMark, ...]

    @property
    def duration(self) -> int:
        """Total duration in 45 kHz ticks."""
        return sum(item.duration for item in self.play_items)


# ---------------------------------------------------------------------------
# Byte reader
# ---------------------------------------------------------------------------

class _Reader:
    """Big-endian cursor over an immutable byte string."""

    __slots__ = ("data", "offset")

    def __init__(self, data: bytes, offset: int = 0) -> None:
        self.data = data
        self.offset = offset

    def _unpack(self, fmt: str, size: int) -> int:
        try:
            (value,) = struct.unpack_from(fmt, self.data, self.offset)
        except struct.error as exc:
            raise MetadataReadError(
                f"truncated playlist data at offset {self.offset}",
            ) from exc
        self.offset += size
        return value

    def u8(self) -> int:
        return self._unpack(">B", 1)

    def u16(self) -> int:
        return self._unpack(">H", 2)

    def u32(self) -> int:
        return self._unpack(">I", 4)

    def read(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise MetadataReadError(f"truncated playlist data at offset {self.offset}")
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def skip(self, size: int) -> None:
        self.offset += size

    def seek(self, offset: int) -> None:
        if offset > len(self.data):
            raise MetadataReadError(f"section offset {offset} beyond end of playlist data")
        self.offset = offset


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_mpls(data: bytes) -> MplsPlaylist:
    """Decode an MPLS file.

    Raises
    ------
    MetadataReadError
        When the data is not an MPLS file or is truncated.
    """
    try:
        magic, version, playlist_start, mark_start, _ext_start = _HEADER.unpack_from(data, 0)
    except struct.error as exc:
        raise MetadataReadError("playlist file too short for an MPLS header") from exc
    if magic != MPLS_MAGIC:
        raise MetadataReadError(f"not an MPLS playlist (magic {magic!r})")

    play_items = _parse_play_list(_Reader(data, playlist_start))
    marks = _parse_marks(_Reader(data, mark_start)) if mark_start else ()

    return MplsPlaylist(
        version=version.decode("ascii", "replace"),
        play_items=play_items,
        marks=marks,
    )


def _parse_play_list(r: _Reader) -> tuple[MplsPlayItem, ...]:
    r.skip(4)  # length
    r.skip(2)  # reserved
    item_count = r.u16()
    r.skip(2)  # number_of_SubPaths
    return tuple(_parse_play_item(r) for _ in range(item_count))


def _parse_play_item(r: _Reader) -> MplsPlayItem:
    start = r.offset
    end = start + 2 + r.u16()

    clip_id = r.read(5).decode("ascii", "replace")
    r.skip(4)  # codec identifier, "M2TS"
    flags = r.u16()
    is_multi_angle = bool((flags >> 4) & 0x1)
    r.skip(1)  # ref_to_STC_id
    in_time = r.u32()
    out_time = r.u32()
    r.skip(8)  # UO mask table
    r.skip(1)  # random access flag
    r.skip(1)  # still mode
    r.skip(2)  # still time

    angle_count = 1
    if is_multi_angle:
        angle_count = r.u8()
        r.skip(1)
        r.skip(10 * max(angle_count - 1, 0))

    video, audio, subtitles = _parse_stn_table(r)
    r.seek(end)

    return MplsPlayItem(
        clip_id=clip_id,
        in_time=in_time,
        out_time=out_time,
        angle_count=max(angle_count, 1),
        video_streams=video,
        audio_streams=audio,
        subtitle_streams=subtitles,
    )


def _parse_stn_table(
    r: _Reader,
) -> tuple[tuple[MplsStream, ...], tuple[MplsStream, ...], tuple[MplsStream, ...]]:
    start = r.offset
    end = start + 2 + r.u16()
    r.skip(2)  # reserved

    video_count = r.u8()
    audio_count = r.u8()
    pg_count = r.u8()
    r.skip(1)  # IG
    r.skip(1)  # secondary audio
    r.skip(1)  # secondary video
    pip_pg_count = r.u8()
    r.skip(5)  # reserved

    video = tuple(_parse_stream(r) for _ in range(video_count))
    audio = tuple(_parse_stream(r) for _ in range(audio_count))
    subtitles = tuple(_parse_stream(r) for _ in range(pg_count + pip_pg_count))

    r.seek(end)
    return video, audio, subtitles


def _parse_stream(r: _Reader) -> MplsStream:
    entry_start = r.offset
    entry_end = entry_start + 1 + r.u8()
    stream_type = r.u8()
    if stream_type == 1:
        pid = r.u16()
    elif stream_type in (2, 4):
        r.skip(2)  # sub path id, sub clip entry id
        pid = r.u16()
    elif stream_type == 3:
        r.skip(1)  # sub path id
        pid = r.u16()
    else:
        pid = 0
    r.seek(entry_end)

    attr_start = r.offset
    attr_end = attr_start + 1 + r.u8()
    coding_type = r.u8()
    language: str | None = None
    if coding_type in AUDIO_CODING_TYPES:
        r.skip(1)  # format / sample rate
        language = _language(r.read(3))
    elif coding_type in GRAPHICS_CODING_TYPES:
        language = _language(r.read(3))
    elif coding_type == TEXT_SUBTITLE_CODING_TYPE:
        r.skip(1)  # character code
        language = _language(r.read(3))
    r.seek(attr_end)

    return MplsStream(coding_type=coding_type, pid=pid, language=language)


def _parse_marks(r: _Reader) -> tuple[MplsMark, ...]:
    r.skip(4)  # length
    count = r.u16()
    marks: list[MplsMark] = []
    for _ in range(count):
        chunk = r.read(_MARK.size)
        _reserved, mark_type, item_ref, timestamp, _es_pid, duration = _MARK.unpack(chunk)
        marks.append(
            MplsMark(
                mark_type=mark_type,
                play_item_ref=item_ref,
                timestamp=timestamp,
                duration=duration,
            )
        )
    return tuple(marks)


def _language(raw: bytes) -> str | None:
    code = raw.decode("ascii", "replace").strip("\x00 ")
    return code or None
