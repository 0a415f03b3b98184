"""Execute a synthesized command line through bash.

Process substitution (``<(...)``) is a bash feature, so the command is
always handed to ``bash -c`` rather than ``/bin/sh``.
"""

from __future__ import annotations

import subprocess

from bdtool.exceptions import EnvironmentError
from bdtool.infra.tool_detector import require_tool


def run_shell_command(command: str, *, shell: str = "bash") -> int:
    """Run *command* with ``shell -c`` and return its exit status.

    Raises
    ------
    ToolNotFoundError
        When *shell* is not installed.
    EnvironmentError
        When the shell cannot be started.
    """
    executable = require_tool(shell)
    try:
        completed = subprocess.run([str(executable), "-c", command], check=False)
    except OSError as exc:
        raise EnvironmentError(f"could not start {shell}: {exc}") from exc
    return completed.returncode
