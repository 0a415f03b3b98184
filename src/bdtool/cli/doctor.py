"""``bdtool doctor`` — environment diagnostics command.

Checks whether the programs that bdtool's commands rely on are
available and renders a summary table on stderr:

* ``splice`` and the synthesized remux command need ``ffmpeg`` built
  with libbluray,
* ``make-mkv-x`` needs ``bash`` for process substitution.

Missing tools are warnings, not failures: listing playlists, printing
chapters and printing commands work without them.
"""

from __future__ import annotations

import platform
import sys

from bdtool.cli import exit_codes
from bdtool.cli.console import console
from bdtool.config import RuntimeConfig
from bdtool.infra.tool_detector import ToolStatus, detect_tool
from bdtool.version import __version__

Check = tuple[str, str, str]

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _rich_check() -> Check:
    """Return (label, value, status) for the Rich row."""
    try:
        from importlib.metadata import PackageNotFoundError, version
    except ImportError:  # pragma: no cover
        return "rich", "unknown", _WARN
    try:
        return "rich", version("rich"), _OK
    except PackageNotFoundError:
        return "rich", "NOT INSTALLED", _WARN


def _tool_check(label: str, status: ToolStatus) -> Check:
    """Return (label, value, status) for an external tool row."""
    if status.found:
        return label, str(status.path) if status.path else "found", _OK
    return label, "not found", _WARN


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\nbdtool doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def _print_rich_table(checks: list[Check]) -> bool:
    """Render doctor output with Rich; return ``False`` when unavailable."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return False

    table = Table(
        title="bdtool doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()
    return True


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: RuntimeConfig | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check failed,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    if config is None:
        config = RuntimeConfig.from_env()

    tools = [detect_tool(config.ffmpeg), detect_tool(config.shell)]
    checks = [
        ("bdtool", __version__, _OK),
        _python_version_check(),
        _rich_check(),
        _tool_check("ffmpeg", tools[0]),
        _tool_check("shell", tools[1]),
        _os_check(),
    ]

    if not _print_rich_table(checks):
        _print_plain_table(checks)

    for status in tools:
        if not status.found and status.install_commands:
            console.print(f"{status.name} is not installed.")
            console.print("Install using one of the following commands:")
            for cmd in status.install_commands:
                console.print(f"  {cmd}")
            console.print()

    if any("FAIL" in status for _, _, status in checks):
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("All checks passed.")
    return exit_codes.SUCCESS
