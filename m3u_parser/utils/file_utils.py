"""Filesystem helpers for reading playlists and writing exports."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Tuple


def ensure_directory(path: str) -> str:
    """Creates a directory (and its parents) if needed."""

    Path(path).mkdir(parents=True, exist_ok=True)
    return path


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        return handle.read()


def resolve_export_target(filename: str, default_format: str) -> Tuple[str, str]:
    """Returns ``(filename, format)`` for an export.

    The extension of ``filename`` wins over ``default_format``; a filename
    without one gets ``default_format`` appended.
    """

    export_format = default_format
    if "." in os.path.basename(filename):
        export_format = filename.rsplit(".", 1)[-1]
    export_format = export_format.lower()
    if not filename.lower().endswith(export_format):
        filename = f"{filename}.{export_format}"
    return filename, export_format


def save_file(filename: str, content: str) -> None:
    """Writes ``content`` to ``filename``, replacing any existing file."""

    parent = os.path.dirname(os.path.abspath(filename))
    ensure_directory(parent)
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(content)
    logging.info("Saved to file: %s", filename)
