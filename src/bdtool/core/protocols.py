"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import BinaryIO, Protocol

from bdtool.core.models import PlaylistIdentifier, PlaylistMetadata, TitleSelector, TitleSummary


class MetadataProvider(Protocol):
    """Contract for disc metadata backends.

    Any object that implements these methods with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def get_playlist_metadata(self, playlist_id: PlaylistIdentifier) -> PlaylistMetadata:
        """Return the metadata snapshot of *playlist_id*.

        Implementations must map all backend-specific exceptions to
        :class:`~bdtool.exceptions.BdtoolError` subclasses.

        Raises
        ------
        PlaylistNotFoundError
            When the disc has no such playlist.
        MetadataReadError
            When the playlist exists but cannot be read.
        """
        ...  # pragma: no cover

    def get_title_summaries(self, selector: TitleSelector) -> Sequence[TitleSummary]:
        """Return listing rows for the playlists chosen by *selector*.

        Playlists that cannot be read are skipped.
        """
        ...  # pragma: no cover


class PlaylistStreamSource(Protocol):
    """Contract for raw playlist stream backends."""

    def splice(self, playlist_id: PlaylistIdentifier, sink: BinaryIO) -> int:
        """Write the playlist's transport stream to *sink*.

        Returns the number of bytes written.

        Raises
        ------
        SpliceError
            When reading the stream or writing to *sink* fails.
        """
        ...  # pragma: no cover
