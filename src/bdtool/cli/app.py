"""CLI application entry point and command routing for bdtool.

This module is the **sole error boundary** for the entire application.
It catches :class:`~bdtool.exceptions.BdtoolError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* Diagnostics go to stderr through the Rich console; command output goes
  to stdout through :func:`~bdtool.cli.console.emit`.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from bdtool.cli import exit_codes
from bdtool.cli.console import console, emit, emit_raw
from bdtool.config import RuntimeConfig
from bdtool.exceptions import BdtoolError, TerminalOutputError, UsageError
from bdtool.version import __version__

if TYPE_CHECKING:
    from bdtool.core.disc_service import DiscService

USAGE_HINT: str = "Run 'bdtool --help' for usage."

_COMMANDS_HELP = """\
BD-ROOT is the directory where the blu-ray is mounted.  The splice
command also accepts a device file or a blu-ray image.  Write a BD-ROOT
that begins with "-" as ./-name; arguments after COMMAND are taken
as they are, so an OUTFILE may begin with "-".

COMMAND is one of:
  list-playlists               Show all 'interesting' playlists
  list-all-playlists           Show all playlists
  splice PLAYLIST              Write the given playlist as m2ts onto stdout
  print-ff-chapters PLAYLIST   Print chapter info in ffmpeg format
  make-mkv-n PLAYLIST OUTFILE  Print the command to rip the playlist to mkv
  make-mkv-x PLAYLIST OUTFILE  Execute the command to rip the playlist to mkv

Run 'bdtool doctor' to check for ffmpeg and bash.
"""

_COMMAND_ARITY: dict[str, int] = {
    "list-playlists": 0,
    "list-all-playlists": 0,
    "splice": 1,
    "print-ff-chapters": 1,
    "make-mkv-n": 2,
    "make-mkv-x": 2,
}

_ARITY_TEXT: dict[int, str] = {
    0: "takes no arguments",
    1: "takes exactly one argument",
    2: "takes exactly two arguments",
}


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Commands follow the disc root positionally, so they are routed by
    hand rather than with sub-parsers:

    * ``bdtool BD-ROOT COMMAND [ARGS]``
    * ``bdtool doctor``
    * ``bdtool --version``
    """
    parser = argparse.ArgumentParser(
        prog="bdtool",
        usage="%(prog)s BD-ROOT COMMAND [ARGS ...]",
        description="Inspect blu-ray playlists and remux them with ffmpeg.",
        epilog=_COMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("bd_root", nargs="?", default=None, metavar="BD-ROOT")
    parser.add_argument("command", nargs="?", default=None, metavar="COMMAND")
    parser.add_argument("arguments", nargs=argparse.REMAINDER, metavar="ARGS")
    return parser


def _check_arity(command: str, arguments: list[str]) -> None:
    if command not in _COMMAND_ARITY:
        raise UsageError(f"Unrecognized command {command}", hint=USAGE_HINT)
    expected = _COMMAND_ARITY[command]
    if len(arguments) != expected:
        raise UsageError(
            f"command '{command}' {_ARITY_TEXT[expected]}",
            hint=USAGE_HINT,
        )


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _disc_service(bd_root: str) -> DiscService:
    """Open *bd_root* and wrap it in a :class:`DiscService`."""
    from bdtool.core.disc_service import DiscService
    from bdtool.infra.mpls_provider import MplsMetadataProvider

    provider = MplsMetadataProvider(bd_root, on_skip=_warn_skipped)
    return DiscService(provider)


def _warn_skipped(name: str, exc: BdtoolError) -> None:
    console.warn(f"couldn't get title info for {name}: {exc}")


def _handle_list(bd_root: str, config: RuntimeConfig, *, relevant_only: bool) -> int:
    """Print one row per playlist."""
    from bdtool.core.listing import format_title_summary
    from bdtool.core.models import TitleSelector

    selector = TitleSelector(
        relevant_only=relevant_only,
        min_duration_seconds=config.min_title_seconds,
    )
    for summary in _disc_service(bd_root).list_titles(selector):
        emit(format_title_summary(summary))
    return exit_codes.SUCCESS


def _handle_splice(bd_root: str, playlist: str, config: RuntimeConfig) -> int:
    """Relay the playlist's transport stream to stdout."""
    from bdtool.core.playlist_resolver import resolve_playlist
    from bdtool.infra.ffmpeg_splicer import FfmpegPlaylistSource

    if sys.stdout.isatty():
        raise TerminalOutputError("refusing to write m2ts stream to terminal")

    if Path(bd_root).is_dir():
        playlist_id = _disc_service(bd_root).playlist_metadata(playlist).playlist_id
    else:
        playlist_id = resolve_playlist(playlist)

    source = FfmpegPlaylistSource(bd_root, ffmpeg=config.ffmpeg)
    source.splice(playlist_id, sys.stdout.buffer)
    return exit_codes.SUCCESS


def _handle_chapters(bd_root: str, playlist: str) -> int:
    """Print the FFMETADATA chapter file."""
    emit_raw(_disc_service(bd_root).chapter_file(playlist))
    return exit_codes.SUCCESS


def _handle_make_mkv(
    bd_root: str,
    playlist: str,
    outfile: str,
    config: RuntimeConfig,
    *,
    execute: bool,
) -> int:
    """Print, or execute through bash, the ffmpeg remux command."""
    command = _disc_service(bd_root).remux_command(
        playlist,
        outfile,
        self_invocation=config.self_invocation,
        source_path=bd_root,
    )
    if not execute:
        emit(command)
        return exit_codes.SUCCESS

    from bdtool.infra.shell_launcher import run_shell_command

    return exit_codes.from_child_status(run_shell_command(command, shell=config.shell))


def _handle_doctor(config: RuntimeConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from bdtool.cli.doctor import run_doctor

    return run_doctor(config)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None, config: RuntimeConfig | None = None) -> int:
    """Run the bdtool CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    config:
        Runtime settings.  Read from the environment when ``None``.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.bd_root is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if config is None:
        config = RuntimeConfig.from_env()

    bd_root: str = args.bd_root
    if bd_root == "doctor" and args.command is None:
        return _handle_doctor(config)

    if args.command is None:
        raise UsageError("need to specify bluray root and command.", hint=USAGE_HINT)

    command: str = args.command
    arguments: list[str] = list(args.arguments)
    _check_arity(command, arguments)

    if command == "list-playlists":
        return _handle_list(bd_root, config, relevant_only=True)
    if command == "list-all-playlists":
        return _handle_list(bd_root, config, relevant_only=False)
    if command == "splice":
        return _handle_splice(bd_root, arguments[0], config)
    if command == "print-ff-chapters":
        return _handle_chapters(bd_root, arguments[0])
    return _handle_make_mkv(
        bd_root,
        arguments[0],
        arguments[1],
        config,
        execute=command == "make-mkv-x",
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BdtoolError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
