"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
normalisation and derived values.
"""

from __future__ import annotations

import pytest

from bdtool.core.models import (
    MAX_PLAYLIST_ID,
    ChapterEntry,
    PlaylistIdentifier,
    PlaylistMetadata,
    StreamDescriptor,
    StreamKind,
    TitleSelector,
)


def _make_stream(**overrides: object) -> StreamDescriptor:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "kind": StreamKind.AUDIO,
        "pid": 0x1100,
        "language": "eng",
        "ordinal": 0,
    }
    defaults.update(overrides)
    return StreamDescriptor(**defaults)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# PlaylistIdentifier
# ---------------------------------------------------------------------------

class TestPlaylistIdentifier:
    def test_int_and_str(self) -> None:
        pid = PlaylistIdentifier(800)
        assert int(pid) == 800
        assert str(pid) == "800"

    def test_mpls_name_is_zero_padded(self) -> None:
        assert PlaylistIdentifier(1).mpls_name == "00001"
        assert PlaylistIdentifier(123456).mpls_name == "123456"

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            PlaylistIdentifier(-1)

    def test_above_range_rejected(self) -> None:
        with pytest.raises(ValueError):
            PlaylistIdentifier(MAX_PLAYLIST_ID + 1)

    def test_frozen(self) -> None:
        pid = PlaylistIdentifier(1)
        with pytest.raises(AttributeError):
            pid.value = 2  # type: ignore[misc]

    def test_equality(self) -> None:
        assert PlaylistIdentifier(5) == PlaylistIdentifier(5)
        assert PlaylistIdentifier(5) != PlaylistIdentifier(6)


# ---------------------------------------------------------------------------
# StreamDescriptor
# ---------------------------------------------------------------------------

class TestStreamDescriptor:
    def test_fields_accessible(self) -> None:
        s = _make_stream()
        assert s.kind is StreamKind.AUDIO
        assert s.pid == 0x1100
        assert s.language == "eng"
        assert s.ordinal == 0
        assert s.has_language

    def test_empty_language_normalised_to_none(self) -> None:
        s = _make_stream(language="")
        assert s.language is None
        assert not s.has_language

    def test_frozen(self) -> None:
        s = _make_stream()
        with pytest.raises(AttributeError):
            s.pid = 1  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("kind", "letter"),
        [(StreamKind.VIDEO, "v"), (StreamKind.AUDIO, "a"), (StreamKind.SUBTITLE, "s")],
    )
    def test_specifier_letters(self, kind: StreamKind, letter: str) -> None:
        assert kind.specifier == letter


# ---------------------------------------------------------------------------
# ChapterEntry / PlaylistMetadata
# ---------------------------------------------------------------------------

class TestChapterEntry:
    def test_end_is_start_plus_duration(self) -> None:
        assert ChapterEntry(start=900_000, duration=450_000).end == 1_350_000


class TestPlaylistMetadata:
    def test_defaults(self) -> None:
        meta = PlaylistMetadata(playlist_id=PlaylistIdentifier(1))
        assert meta.chapter_count == 0
        assert meta.video_streams == ()
        assert meta.clip_count == 1
        assert meta.angle_count == 1

    def test_chapter_count_follows_chapters(self) -> None:
        meta = PlaylistMetadata(
            playlist_id=PlaylistIdentifier(1),
            chapters=(ChapterEntry(0, 10), ChapterEntry(10, 10)),
        )
        assert meta.chapter_count == 2


class TestTitleSelector:
    def test_defaults(self) -> None:
        selector = TitleSelector()
        assert selector.relevant_only is False
        assert selector.min_duration_seconds == 120
