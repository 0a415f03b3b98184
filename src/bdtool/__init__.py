"""bdtool — Blu-ray playlist inspection and ffmpeg remux command builder.

Reads playlist metadata from a mounted disc and renders chapter files
and shell-safe ``ffmpeg`` command lines with a strict layered
architecture.
"""

from bdtool.version import __version__

__all__: list[str] = ["__version__"]
