"""Exit-code constants used by the CLI layer.

Every command returns one of these, except ``make-mkv-x`` which passes
through the exit status of the shell running the remux command (see
:func:`from_child_status`).
"""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed; its output (if any) is complete."""

GENERAL_ERROR: int = 1
"""A BdtoolError was reported: bad playlist, missing disc, usage error…"""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

SIGNAL_BASE: int = 128
"""Offset added to a signal number, as shells do."""

KEYBOARD_INTERRUPT: int = SIGNAL_BASE + 2
"""User pressed Ctrl+C (SIGINT)."""


def from_child_status(returncode: int) -> int:
    """Map a :mod:`subprocess` return code to a process exit code.

    Negative codes mean the child was killed by a signal and become
    ``128 + signal`` like in a shell.
    """
    if returncode < 0:
        return SIGNAL_BASE - returncode
    return returncode
