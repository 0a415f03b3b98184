"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from bdtool import __version__
from bdtool.cli import exit_codes
from bdtool.cli.app import main
from bdtool.exceptions import (
    AllocationFailureError,
    BdtoolError,
    DiscOpenError,
    EnvironmentError,
    InvalidPlaylistIdentifierError,
    MetadataReadError,
    PlaylistNotFoundError,
    SpliceError,
    TerminalOutputError,
    ToolNotFoundError,
    UsageError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InvalidPlaylistIdentifierError,
            PlaylistNotFoundError,
            AllocationFailureError,
            DiscOpenError,
            MetadataReadError,
            SpliceError,
            TerminalOutputError,
            UsageError,
            EnvironmentError,
            ToolNotFoundError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[BdtoolError]
    ) -> None:
        assert issubclass(exc_class, BdtoolError)

    def test_terminal_output_is_a_splice_error(self) -> None:
        assert issubclass(TerminalOutputError, SpliceError)

    def test_tool_not_found_is_an_environment_error(self) -> None:
        assert issubclass(ToolNotFoundError, EnvironmentError)

    def test_hint_is_stored(self) -> None:
        err = BdtoolError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = BdtoolError("boom")
        assert err.hint is None

    def test_invalid_identifier_carries_context(self) -> None:
        err = InvalidPlaylistIdentifierError("12a3", 2, "a")
        assert err.text == "12a3"
        assert err.position == 2
        assert err.character == "a"
        assert "'a'" in str(err)
        assert "position 2" in str(err)
        assert err.hint is not None

    def test_invalid_identifier_empty_text(self) -> None:
        err = InvalidPlaylistIdentifierError("", 0, None)
        assert err.character is None
        assert "empty" in str(err)

    def test_playlist_not_found_message(self) -> None:
        err = PlaylistNotFoundError(42)
        assert err.playlist_id == 42
        assert str(err) == "playlist '42' not found"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2

    @pytest.mark.parametrize(
        ("returncode", "expected"),
        [(0, 0), (1, 1), (255, 255), (-2, 130), (-15, 143)],
    )
    def test_from_child_status(self, returncode: int, expected: int) -> None:
        assert exit_codes.from_child_status(returncode) == expected


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "make-mkv-n" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("bdtool.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, _mock_doc: object) -> None:
        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
