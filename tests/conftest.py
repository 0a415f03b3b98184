"""Shared pytest fixtures and configuration for the bdtool test suite.

Guidelines
----------
* No real disc, ffmpeg or bash is required by any test.
* External processes are mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Disc fixtures are synthetic MPLS files written to ``tmp_path``.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from bdtool.config import RuntimeConfig


# ---------------------------------------------------------------------------
# MPLS builder
# ---------------------------------------------------------------------------

@dataclass
class ItemSpec:
    """Description of one play item for :func:`build_mpls`."""

    clip: str = "00001"
    in_time: int = 0
    out_time: int = 45_000 * 600
    angles: int = 1
    video: Sequence[tuple[int, int]] = ((0x1011, 0x1B),)
    audio: Sequence[tuple[int, int, str]] = ((0x1100, 0x81, "eng"),)
    pg: Sequence[tuple[int, str]] = ()
    pip_pg: Sequence[tuple[int, str]] = ()


@dataclass
class MarkSpec:
    item: int
    timestamp: int
    mark_type: int = 1


@dataclass
class PlaylistSpec:
    items: list[ItemSpec] = field(default_factory=lambda: [ItemSpec()])
    marks: list[MarkSpec] = field(default_factory=list)


def _stream_entry(pid: int, stream_type: int = 1) -> bytes:
    if stream_type == 1:
        body = struct.pack(">BH", 1, pid)
    elif stream_type in (2, 4):
        body = struct.pack(">BBBH", stream_type, 0x00, 0x05, pid)
    else:
        body = struct.pack(">BBH", stream_type, 0x00, pid)
    body = body.ljust(9, b"\x00")
    return bytes([len(body)]) + body


def _attributes(body: bytes) -> bytes:
    body = body.ljust(5, b"\x00")
    return bytes([len(body)]) + body


def _stn(item: ItemSpec) -> bytes:
    streams = b""
    for pid, coding in item.video:
        streams += _stream_entry(pid) + _attributes(bytes([coding, 0x61]))
    for pid, coding, lang in item.audio:
        streams += _stream_entry(pid) + _attributes(bytes([coding, 0x31]) + lang.encode().ljust(3, b"\x00"))
    for pid, lang in item.pg:
        streams += _stream_entry(pid) + _attributes(bytes([0x90]) + lang.encode().ljust(3, b"\x00"))
    for pid, lang in item.pip_pg:
        streams += _stream_entry(pid, stream_type=4) + _attributes(bytes([0x90]) + lang.encode().ljust(3, b"\x00"))

    body = struct.pack(
        ">H7B5x",
        0,
        len(item.video),
        len(item.audio),
        len(item.pg),
        0,
        0,
        0,
        len(item.pip_pg),
    ) + streams
    return struct.pack(">H", len(body)) + body


def _play_item(item: ItemSpec) -> bytes:
    flags = 0x10 if item.angles > 1 else 0
    body = item.clip.encode().ljust(5, b"0")[:5] + b"M2TS"
    body += struct.pack(">HBII", flags, 0, item.in_time, item.out_time)
    body += b"\x00" * 8 + b"\x00" + b"\x00" + b"\x00\x00"
    if item.angles > 1:
        body += bytes([item.angles, 0])
        body += (b"00002M2TS\x00") * (item.angles - 1)
    body += _stn(item)
    return struct.pack(">H", len(body)) + body


def build_mpls(spec: PlaylistSpec) -> bytes:
    """Serialise *spec* as an MPLS file."""
    items = b"".join(_play_item(item) for item in spec.items)
    playlist_body = struct.pack(">HHH", 0, len(spec.items), 0) + items
    playlist = struct.pack(">I", len(playlist_body)) + playlist_body

    marks_body = struct.pack(">H", len(spec.marks)) + b"".join(
        struct.pack(">BBHIHI", 0, mark.mark_type, mark.item, mark.timestamp, 0xFFFF, 0)
        for mark in spec.marks
    )
    marks = struct.pack(">I", len(marks_body)) + marks_body

    playlist_start = 40
    mark_start = playlist_start + len(playlist)
    header = struct.pack(">4s4sIII", b"MPLS", b"0200", playlist_start, mark_start, 0)
    return header.ljust(playlist_start, b"\x00") + playlist + marks


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_disc(tmp_path: Path) -> Callable[[dict[str, bytes | PlaylistSpec]], Path]:
    """Return a factory writing ``BDMV/PLAYLIST`` files under ``tmp_path``.

    Keys are file stems (``"00001"``); values are raw bytes or a
    :class:`PlaylistSpec`.
    """

    def factory(playlists: dict[str, bytes | PlaylistSpec]) -> Path:
        root = tmp_path / "disc"
        playlist_dir = root / "BDMV" / "PLAYLIST"
        playlist_dir.mkdir(parents=True, exist_ok=True)
        for stem, content in playlists.items():
            data = content if isinstance(content, bytes) else build_mpls(content)
            (playlist_dir / f"{stem}.mpls").write_bytes(data)
        return root

    return factory


@pytest.fixture
def config() -> RuntimeConfig:
    return RuntimeConfig(self_invocation=("bdtool",))
