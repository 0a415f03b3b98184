"""CLI console helpers with optional Rich support.

Diagnostics (errors, warnings, doctor tables) go to **stderr** through
Rich.  Program output that other tools consume — playlist listings,
chapter files, command lines — goes to **stdout** unstyled through
:func:`emit`, so it can be redirected or piped safely.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from bdtool.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def warn(self, message: str) -> None:
		"""Render a one-line warning."""
		self.print(f"[yellow]Warning:[/yellow] {message}")


console = _ConsoleProxy()


def emit(text: str) -> None:
	"""Write *text* plus a newline to stdout, without any markup."""
	sys.stdout.write(text)
	sys.stdout.write("\n")
	sys.stdout.flush()


def emit_raw(text: str) -> None:
	"""Write *text* to stdout exactly as given."""
	sys.stdout.write(text)
	sys.stdout.flush()
