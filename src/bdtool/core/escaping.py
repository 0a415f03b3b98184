"""POSIX shell quoting.

Wraps a value in single quotes and replaces every embedded ``'`` with
``'\\''`` (close quote, escaped quote, reopen quote).  Inside single
quotes a POSIX shell interprets nothing, so this is safe for arbitrary
byte content.  Unlike :func:`shlex.quote` the result is *always*
quoted, which keeps generated command lines uniform.
"""

from __future__ import annotations

from typing import overload

from bdtool.core.buffer import GrowableBuffer


@overload
def shell_escape(value: str) -> str: ...


@overload
def shell_escape(value: bytes) -> bytes: ...


def shell_escape(value: str | bytes) -> str | bytes:
    """Return *value* as a single shell word.

    ``shell_escape("")`` is ``"''"``, never an empty string.
    """
    if isinstance(value, bytes):
        return b"'" + value.replace(b"'", b"'\\''") + b"'"
    return "'" + value.replace("'", "'\\''") + "'"


def append_shell_escaped(buffer: GrowableBuffer, value: str | bytes) -> None:
    """Append the escaped form of *value* to *buffer*."""
    if isinstance(value, bytes):
        buffer.append_bytes(shell_escape(value))
    else:
        buffer.append_text(shell_escape(value))
