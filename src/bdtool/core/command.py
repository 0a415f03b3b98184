"""Synthesis of the ``ffmpeg`` remux command line for one playlist.

The command reads the playlist's transport stream (and, when the
playlist has chapters, its FFMETADATA chapter file) from bdtool itself
through bash process substitution, copies every video, audio and
subtitle stream of the first clip, and writes the result to the output
file::

    ffmpeg -i <('bdtool' '/mnt/bd' splice 800) \\
        -i <('bdtool' '/mnt/bd' print-ff-chapters 800) -map_chapters 1 \\
        -map 0:i:0x1011 -c copy -disposition:v:0 default ... 'out.mkv'

(shown wrapped; the real output is a single line with fragments
separated by exactly one space).

Disposition policy
------------------
Without an explicit default, ffmpeg flags every stream as default and
players such as VLC then auto-select the last subtitle stream.  The
first video stream is therefore marked ``default`` and every other
stream, including all audio and subtitle streams, is cleared to ``0``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from bdtool.core.buffer import GrowableBuffer
from bdtool.core.escaping import append_shell_escaped
from bdtool.core.models import PlaylistIdentifier, PlaylistMetadata, StreamDescriptor

REMUX_TOOL: str = "ffmpeg"
SPLICE_COMMAND: str = "splice"
CHAPTERS_COMMAND: str = "print-ff-chapters"

_BARE_LANGUAGE = re.compile(r"[A-Za-z0-9]+")


class CommandSynthesizer:
    """Builds remux command lines.

    Parameters
    ----------
    self_invocation:
        Words of the command that runs bdtool (e.g. ``("bdtool",)`` or
        ``("/usr/bin/python3", "-m", "bdtool")``).  Each word is
        escaped individually.
    tool:
        Remux tool name, emitted verbatim.
    """

    def __init__(
        self,
        self_invocation: Sequence[str],
        *,
        tool: str = REMUX_TOOL,
    ) -> None:
        if not self_invocation:
            raise ValueError("self_invocation must contain at least one word")
        self._self_invocation: tuple[str, ...] = tuple(self_invocation)
        self._tool: str = tool

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def synthesize(
        self,
        source_path: str,
        playlist_id: PlaylistIdentifier,
        metadata: PlaylistMetadata,
        output_path: str,
    ) -> str:
        """Return the full command line as text."""
        buf = GrowableBuffer()
        buf.append_text(self._tool)
        buf.append_text(" ")

        self._append_input(buf, source_path, SPLICE_COMMAND, playlist_id)

        if metadata.chapter_count > 0:
            self._append_input(buf, source_path, CHAPTERS_COMMAND, playlist_id)
            buf.append_text("-map_chapters 1 ")

        for index, stream in enumerate(metadata.video_streams):
            self._append_mapping(buf, stream, index, default=index == 0)
        for index, stream in enumerate(metadata.audio_streams):
            self._append_mapping(buf, stream, index, default=False)
        for index, stream in enumerate(metadata.subtitle_streams):
            self._append_mapping(buf, stream, index, default=False)

        append_shell_escaped(buf, output_path)
        return buf.text()

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def _append_input(
        self,
        buf: GrowableBuffer,
        source_path: str,
        command: str,
        playlist_id: PlaylistIdentifier,
    ) -> None:
        buf.append_text("-i <(")
        for word in self._self_invocation:
            append_shell_escaped(buf, word)
            buf.append_text(" ")
        append_shell_escaped(buf, source_path)
        buf.append_formatted(" {} {}) ", command, int(playlist_id))

    @staticmethod
    def _append_mapping(
        buf: GrowableBuffer,
        stream: StreamDescriptor,
        index: int,
        *,
        default: bool,
    ) -> None:
        spec = stream.kind.specifier
        buf.append_formatted("-map 0:i:{:#x} -c copy ", stream.pid)
        buf.append_formatted(
            "-disposition:{}:{} {} ",
            spec,
            index,
            "default" if default else "0",
        )
        if stream.language is not None:
            buf.append_formatted("-metadata:s:{}:{} ", spec, index)
            _append_language(buf, stream.language)
            buf.append_text(" ")


def _append_language(buf: GrowableBuffer, language: str) -> None:
    token = f"language={language}"
    if _BARE_LANGUAGE.fullmatch(language):
        buf.append_text(token)
    else:
        append_shell_escaped(buf, token)


def synthesize_remux_command(
    self_invocation: Sequence[str],
    source_path: str,
    playlist_id: PlaylistIdentifier,
    metadata: PlaylistMetadata,
    output_path: str,
) -> str:
    """Functional shortcut for :meth:`CommandSynthesizer.synthesize`."""
    synthesizer = CommandSynthesizer(self_invocation)
    return synthesizer.synthesize(source_path, playlist_id, metadata, output_path)
