"""Runtime configuration for bdtool.

Settings are read once from the environment by the CLI layer and
threaded explicitly into the components that need them.  Nothing in
``core`` or ``infra`` reads the environment on its own.

Environment variables
---------------------
``BDTOOL_FFMPEG``
    ffmpeg binary used for the raw ``splice`` relay (default ``ffmpeg``).
``BDTOOL_SHELL``
    Shell that executes ``make-mkv-x`` commands (default ``bash``).
``BDTOOL_SELF``
    Command that re-invokes bdtool inside the synthesized command line.
    Split with :func:`shlex.split`.  Defaults to ``sys.argv[0]``, or
    ``python -m bdtool`` when running as a module.
``BDTOOL_MIN_TITLE_SECONDS``
    Minimum duration for ``list-playlists`` (default ``120``).
"""

from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from bdtool.exceptions import UsageError

DEFAULT_FFMPEG: str = "ffmpeg"
DEFAULT_SHELL: str = "bash"
DEFAULT_MIN_TITLE_SECONDS: int = 120


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Immutable settings for one bdtool invocation."""

    self_invocation: tuple[str, ...]
    """Words of the command that runs bdtool again (unescaped)."""

    ffmpeg: str = DEFAULT_FFMPEG
    shell: str = DEFAULT_SHELL
    min_title_seconds: int = DEFAULT_MIN_TITLE_SECONDS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        argv: Sequence[str] | None = None,
    ) -> RuntimeConfig:
        """Build a config from *environ* (default ``os.environ``)."""
        env = os.environ if environ is None else environ
        args = sys.argv if argv is None else argv

        raw_self = env.get("BDTOOL_SELF", "").strip()
        if raw_self:
            try:
                self_invocation = tuple(shlex.split(raw_self))
            except ValueError as exc:
                raise UsageError(
                    f"BDTOOL_SELF is not valid shell syntax: {exc}",
                ) from exc
        else:
            self_invocation = default_self_invocation(args)

        raw_min = env.get("BDTOOL_MIN_TITLE_SECONDS", "").strip()
        if raw_min:
            try:
                min_title_seconds = int(raw_min)
            except ValueError as exc:
                raise UsageError(
                    f"BDTOOL_MIN_TITLE_SECONDS must be an integer, got {raw_min!r}",
                ) from exc
            if min_title_seconds < 0:
                raise UsageError("BDTOOL_MIN_TITLE_SECONDS must not be negative")
        else:
            min_title_seconds = DEFAULT_MIN_TITLE_SECONDS

        return cls(
            self_invocation=self_invocation,
            ffmpeg=env.get("BDTOOL_FFMPEG") or DEFAULT_FFMPEG,
            shell=env.get("BDTOOL_SHELL") or DEFAULT_SHELL,
            min_title_seconds=min_title_seconds,
        )


def default_self_invocation(argv: Sequence[str]) -> tuple[str, ...]:
    """Derive the self-invocation command from *argv*.

    ``python -m bdtool`` leaves the path of ``__main__.py`` in
    ``argv[0]``, which cannot be executed directly, so the interpreter
    is invoked explicitly in that case.
    """
    program = argv[0] if argv else ""
    if not program or os.path.basename(program) == "__main__.py":
        return (sys.executable or "python3", "-m", "bdtool")
    return (program,)
