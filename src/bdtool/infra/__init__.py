"""Infrastructure layer — external system integration.

This layer wraps all interaction with the disc filesystem, ffmpeg and
the shell.  Every raw OS or subprocess exception must be caught here
and re-raised as a :class:`~bdtool.exceptions.BdtoolError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from bdtool.infra.ffmpeg_splicer import FfmpegPlaylistSource
from bdtool.infra.mpls_provider import MplsMetadataProvider
from bdtool.infra.shell_launcher import run_shell_command
from bdtool.infra.tool_detector import ToolStatus, detect_tool, require_tool

__all__: list[str] = [
    "FfmpegPlaylistSource",
    "MplsMetadataProvider",
    "ToolStatus",
    "detect_tool",
    "require_tool",
    "run_shell_command",
]
