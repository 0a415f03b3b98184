"""Core disc service — orchestrates resolution, lookup and rendering.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~bdtool.core.protocols.MetadataProvider` injected
at construction time (dependency inversion), keeping the core free of
any filesystem access.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``.
* Identifiers are resolved and metadata fetched before any output is
  rendered, so a failure never yields a partial command line.
* Only :class:`~bdtool.exceptions.BdtoolError` subclasses escape.
"""

from __future__ import annotations

from collections.abc import Sequence

from bdtool.core.chapters import format_chapters
from bdtool.core.command import CommandSynthesizer
from bdtool.core.models import PlaylistMetadata, TitleSelector, TitleSummary
from bdtool.core.playlist_resolver import resolve_playlist
from bdtool.core.protocols import MetadataProvider
from bdtool.exceptions import BdtoolError, MetadataReadError


class DiscService:
    """Stateless service turning playlist requests into text output.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`MetadataProvider` protocol.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider: MetadataProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def playlist_metadata(self, playlist_text: str) -> PlaylistMetadata:
        """Resolve *playlist_text* and fetch its metadata.

        Raises
        ------
        InvalidPlaylistIdentifierError
            If *playlist_text* is not a plain decimal number.
        PlaylistNotFoundError
            If the disc has no such playlist.
        MetadataReadError
            If the backend fails unexpectedly.
        """
        playlist_id = resolve_playlist(playlist_text)
        try:
            return self._provider.get_playlist_metadata(playlist_id)
        except BdtoolError:
            raise
        except Exception as exc:
            raise MetadataReadError(
                f"Unexpected metadata provider error: {exc}",
            ) from exc

    def chapter_file(self, playlist_text: str) -> str:
        """Return the FFMETADATA chapter file of a playlist."""
        return format_chapters(self.playlist_metadata(playlist_text))

    def remux_command(
        self,
        playlist_text: str,
        output_path: str,
        *,
        self_invocation: Sequence[str],
        source_path: str,
    ) -> str:
        """Return the ffmpeg command line that remuxes a playlist."""
        metadata = self.playlist_metadata(playlist_text)
        synthesizer = CommandSynthesizer(self_invocation)
        return synthesizer.synthesize(
            source_path,
            metadata.playlist_id,
            metadata,
            output_path,
        )

    def list_titles(self, selector: TitleSelector) -> tuple[TitleSummary, ...]:
        """Return the listing rows chosen by *selector*."""
        try:
            return tuple(self._provider.get_title_summaries(selector))
        except BdtoolError:
            raise
        except Exception as exc:
            raise MetadataReadError(
                f"Unexpected metadata provider error: {exc}",
            ) from exc
