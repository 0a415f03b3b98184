"""Allow ``python -m bdtool`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m bdtool`` behaves identically to the ``bdtool``
console script.
"""

from __future__ import annotations

from bdtool.cli.app import cli

if __name__ == "__main__":
    cli()
