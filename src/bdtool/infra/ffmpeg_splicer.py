"""ffmpeg backed implementation of :class:`~bdtool.core.protocols.PlaylistStreamSource`.

Relays a playlist as an MPEG transport stream by running ffmpeg's
libbluray protocol (``-playlist N -i bluray:ROOT``) with stream copy.
The mpegts muxer keeps the on-disc PIDs, so the ``-map 0:i:0x....``
selectors of a synthesized remux command still match.

Process failures are re-raised as :class:`~bdtool.exceptions.SpliceError`.
"""

from __future__ import annotations

import io
import subprocess
import tempfile
from pathlib import Path
from typing import BinaryIO

from bdtool.core.models import PlaylistIdentifier
from bdtool.exceptions import SpliceError
from bdtool.infra.tool_detector import require_tool

CHUNK_SIZE: int = 192 * 1024
STDERR_TAIL: int = 4096


class FfmpegPlaylistSource:
    """Concrete :class:`PlaylistStreamSource` spawning ffmpeg.

    Parameters
    ----------
    root:
        Disc root, device or image path understood by libbluray.
    ffmpeg:
        ffmpeg command name or path.
    """

    def __init__(self, root: str | Path, *, ffmpeg: str = "ffmpeg") -> None:
        self._root = str(root)
        self._ffmpeg = ffmpeg

    def build_args(self, executable: str, playlist_id: PlaylistIdentifier) -> list[str]:
        """Return the ffmpeg argument vector for *playlist_id*."""
        return [
            executable,
            "-nostdin",
            "-hide_banner",
            "-loglevel",
            "error",
            "-playlist",
            str(int(playlist_id)),
            "-i",
            f"bluray:{self._root}",
            "-map",
            "0",
            "-c",
            "copy",
            "-f",
            "mpegts",
            "pipe:1",
        ]

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def splice(self, playlist_id: PlaylistIdentifier, sink: BinaryIO) -> int:
        """Copy the playlist's transport stream to *sink*.

        Raises
        ------
        ToolNotFoundError
            When ffmpeg is not installed.
        SpliceError
            When ffmpeg fails or *sink* accepts fewer bytes than given.
        """
        executable = require_tool(self._ffmpeg)
        args = self.build_args(str(executable), playlist_id)

        # stderr goes to a file: a full stderr pipe would stall the relay.
        with tempfile.TemporaryFile() as errors:
            try:
                proc = subprocess.Popen(
                    args,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.PIPE,
                    stderr=errors,
                )
            except OSError as exc:
                raise SpliceError(f"could not start ffmpeg: {exc}") from exc

            total = 0
            try:
                if proc.stdout is None:
                    raise SpliceError("ffmpeg was started without an output pipe")
                while True:
                    chunk = proc.stdout.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total += _write_chunk(sink, chunk)
                _flush(sink)
            except BaseException:
                proc.kill()
                proc.wait()
                raise

            returncode = proc.wait()
            if returncode != 0:
                raise SpliceError(
                    f"ffmpeg exited with status {returncode} while splicing playlist {playlist_id}",
                    hint=_last_line(errors) or (
                        "ffmpeg must be built with libbluray support (--enable-libbluray)."
                    ),
                )
        return total


# ---------------------------------------------------------------------------
# Sink helpers
# ---------------------------------------------------------------------------

def _write_chunk(sink: BinaryIO, chunk: bytes) -> int:
    try:
        written = sink.write(chunk)
    except OSError as exc:
        raise SpliceError(f"write failure: {exc.strerror or exc}") from exc
    if written is not None and written != len(chunk):
        raise SpliceError(f"write failure: wrote only {written} of {len(chunk)} bytes")
    return len(chunk)


def _flush(sink: BinaryIO) -> None:
    try:
        sink.flush()
    except OSError as exc:
        raise SpliceError(f"write failure: {exc.strerror or exc}") from exc


def _last_line(errors: BinaryIO) -> str | None:
    """Return the last non-empty line ffmpeg wrote to *errors*."""
    errors.seek(0, io.SEEK_END)
    errors.seek(max(errors.tell() - STDERR_TAIL, 0))
    detail = errors.read().decode("utf-8", "replace").strip()
    return detail.splitlines()[-1] if detail else None
