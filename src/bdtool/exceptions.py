"""Custom exception hierarchy for bdtool.

All exceptions that cross layer boundaries must inherit from
:class:`BdtoolError`.  Raw third-party or OS exceptions (``OSError``,
``struct.error``, subprocess failures) must NEVER propagate beyond the
infrastructure layer — they must be caught and re-raised as a typed
subclass defined here.

Hierarchy
---------
BdtoolError
├── InvalidPlaylistIdentifierError
├── PlaylistNotFoundError
├── AllocationFailureError
├── DiscOpenError
├── MetadataReadError
├── SpliceError
│   └── TerminalOutputError
├── UsageError
└── EnvironmentError
    └── ToolNotFoundError
"""

from __future__ import annotations


class BdtoolError(Exception):
    """Base exception for all bdtool errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Playlist identifiers --------------------------------------------------

class InvalidPlaylistIdentifierError(BdtoolError):
    """Raised when a textual playlist identifier is not a plain decimal number.

    Carries the raw *text*, the zero-based *position* of the offending
    character and the *character* itself (``None`` when the text is
    empty).
    """

    def __init__(
        self,
        text: str,
        position: int,
        character: str | None,
        *,
        reason: str | None = None,
    ) -> None:
        if reason is None:
            if character is None:
                reason = "playlist identifier must not be empty (it is not read as playlist 0)"
            else:
                reason = f"unexpected char {character!r} at position {position}"
        super().__init__(
            f"illegal playlist {text!r}: {reason}",
            hint="Playlists are given as plain decimal numbers, e.g. 00800 or 800.",
        )
        self.text: str = text
        self.position: int = position
        self.character: str | None = character


class PlaylistNotFoundError(BdtoolError):
    """Raised when the metadata provider has no record for a playlist."""

    def __init__(self, playlist_id: int, *, hint: str | None = None) -> None:
        super().__init__(f"playlist '{playlist_id}' not found", hint=hint)
        self.playlist_id: int = playlist_id


# --- Output buffers ----------------------------------------------------------

class AllocationFailureError(BdtoolError):
    """Raised when an output buffer cannot obtain more memory.

    This is fatal for the operation that triggered it; no partial output
    is ever emitted after it.
    """


# --- Disc access -------------------------------------------------------------

class DiscOpenError(BdtoolError):
    """Raised when the disc root cannot be opened."""


class MetadataReadError(BdtoolError):
    """Raised when playlist metadata cannot be read or is malformed."""


class SpliceError(BdtoolError):
    """Raised when relaying a playlist's raw stream fails."""


class TerminalOutputError(SpliceError):
    """Raised when a binary stream would be written to a terminal."""


# --- Command line ------------------------------------------------------------

class UsageError(BdtoolError):
    """Raised when a command is invoked with the wrong arguments."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BdtoolError):
    """Raised when a required runtime dependency is not available."""


class ToolNotFoundError(EnvironmentError):
    """Raised when an external tool (ffmpeg, bash) is not on PATH."""
