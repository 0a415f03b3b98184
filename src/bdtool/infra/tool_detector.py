"""Infrastructure: external tool detection and platform guidance.

This module is responsible for locating the external programs bdtool
drives (``ffmpeg`` for splicing and remuxing, ``bash`` for executing
synthesized commands) and providing platform-specific installation
guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No permanent PATH modification.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from bdtool.exceptions import ToolNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of looking up a tool.

    Attributes
    ----------
    name : str
        The tool name or path that was looked up.
    found : bool
        Whether the tool was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Look up *name* (a bare command or a path).

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)

    if result is not None:
        resolved = Path(result).resolve()
        return ToolStatus(
            name=name,
            found=True,
            path=resolved,
            version_hint=f"found at {resolved}",
            install_commands=(),
        )

    return ToolStatus(
        name=name,
        found=False,
        path=None,
        version_hint="not found",
        install_commands=_platform_install_commands(os.path.basename(name)),
    )


def require_tool(name: str) -> Path:
    """Locate *name* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(name)
    if not status.found or status.path is None:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append(f"Install {os.path.basename(name)} using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise ToolNotFoundError(
            f"{name} is not installed or not on PATH.",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.path


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

_INSTALL_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "ffmpeg": {
        "windows": ("winget install Gyan.FFmpeg", "choco install ffmpeg"),
        "linux": (
            "sudo apt install ffmpeg",
            "sudo dnf install ffmpeg",
            "sudo pacman -S ffmpeg",
        ),
        "darwin": ("brew install ffmpeg",),
    },
    "bash": {
        "windows": ("winget install Git.Git",),
        "linux": ("sudo apt install bash", "sudo dnf install bash"),
        "darwin": ("brew install bash",),
    },
}


def _platform_install_commands(tool: str) -> tuple[str, ...]:
    """Return install commands for *tool* appropriate for the current OS."""
    by_system = _INSTALL_COMMANDS.get(tool)
    if by_system is None:
        return ()
    system = platform.system().lower()
    if system in by_system:
        return by_system[system]
    # Fallback: generic guidance.
    if tool == "ffmpeg":
        return ("Please install ffmpeg from https://ffmpeg.org/download.html",)
    return ()
