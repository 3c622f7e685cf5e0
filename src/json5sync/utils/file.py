# topmark:header:start
#
#   project      : json5sync
#   file         : file.py
#   file_relpath : src/json5sync/utils/file.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File and path helpers for json5sync."""

from __future__ import annotations

import os
from pathlib import Path


def compute_relpath(file_path: Path, root_path: Path | None) -> Path:
    """Compute the relative path from ``root_path`` to ``file_path``.

    Args:
        file_path (Path): The file path to compute the relative path for.
        root_path (Path | None): The root path; defaults to the current directory.

    Returns:
        Path: The relative path from ``root_path`` to ``file_path``.
    """
    resolved_path = file_path.resolve()
    resolved_root = (root_path or Path.cwd()).resolve()

    try:
        return resolved_path.relative_to(resolved_root)
    except ValueError:
        # Not a direct subpath
        return Path(os.path.relpath(resolved_path, start=resolved_root))


def detect_newline(text: str) -> str:
    r"""Return the first newline sequence used in ``text``.

    Returns one of ``"\r\n"``, ``"\n"`` or ``"\r"``; falls back to ``"\n"`` when
    ``text`` holds no line terminator.
    """
    for line in text.splitlines(keepends=True):
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith("\n"):
            return "\n"
        if line.endswith("\r"):
            return "\r"
    return "\n"


def ends_with_newline(text: str) -> bool:
    """Return True when ``text`` ends with a line terminator."""
    return text.endswith(("\n", "\r"))
