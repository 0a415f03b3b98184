"""Core / service layer — pure business logic and text synthesis.

Rules
-----
* No ``print()`` calls.
* No filesystem, process or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from bdtool.core.buffer import GrowableBuffer
from bdtool.core.chapters import format_chapters
from bdtool.core.command import CommandSynthesizer, synthesize_remux_command
from bdtool.core.disc_service import DiscService
from bdtool.core.escaping import shell_escape
from bdtool.core.models import (
    ChapterEntry,
    PlaylistIdentifier,
    PlaylistMetadata,
    StreamDescriptor,
    StreamKind,
    TitleSelector,
    TitleSummary,
)
from bdtool.core.playlist_resolver import resolve_playlist
from bdtool.core.protocols import MetadataProvider, PlaylistStreamSource

__all__: list[str] = [
    "ChapterEntry",
    "CommandSynthesizer",
    "DiscService",
    "GrowableBuffer",
    "MetadataProvider",
    "PlaylistIdentifier",
    "PlaylistMetadata",
    "PlaylistStreamSource",
    "StreamDescriptor",
    "StreamKind",
    "TitleSelector",
    "TitleSummary",
    "format_chapters",
    "resolve_playlist",
    "shell_escape",
    "synthesize_remux_command",
]
