"""Tests for command execution through bash (infra/shell_launcher.py)."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from bdtool.core.escaping import shell_escape
from bdtool.exceptions import EnvironmentError, ToolNotFoundError
from bdtool.infra.shell_launcher import run_shell_command


@patch("bdtool.infra.shell_launcher.require_tool", return_value=Path("/bin/bash"))
@patch("bdtool.infra.shell_launcher.subprocess.run")
class TestRunShellCommand:
    def test_passes_command_to_shell_c(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)

        assert run_shell_command("ffmpeg -i <(true) 'o.mkv'") == 0

        mock_require.assert_called_once_with("bash")
        mock_run.assert_called_once_with(
            [str(Path("/bin/bash")), "-c", "ffmpeg -i <(true) 'o.mkv'"],
            check=False,
        )

    def test_returns_child_status(self, mock_run: MagicMock, _mock_require: MagicMock) -> None:
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=3)
        assert run_shell_command("exit 3", shell="zsh") == 3

    def test_start_failure(self, mock_run: MagicMock, _mock_require: MagicMock) -> None:
        mock_run.side_effect = OSError(8, "Exec format error")
        with pytest.raises(EnvironmentError, match="could not start bash"):
            run_shell_command("true")

    def test_missing_shell(self, mock_run: MagicMock, mock_require: MagicMock) -> None:
        mock_require.side_effect = ToolNotFoundError("bash is not installed or not on PATH.")
        with pytest.raises(ToolNotFoundError):
            run_shell_command("true")
        mock_run.assert_not_called()


@pytest.mark.skipif(shutil.which("bash") is None, reason="bash not available")
def test_process_substitution_with_real_bash(tmp_path: Path) -> None:
    target = tmp_path / "it's here.txt"
    command = f"cat <(printf '%s' hello) > {shell_escape(str(target))}"
    assert run_shell_command(command) == 0
    assert target.read_text() == "hello"
