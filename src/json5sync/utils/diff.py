# topmark:header:start
#
#   project      : json5sync
#   file         : diff.py
#   file_relpath : src/json5sync/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized rendering.

The runner uses `unified_diff_lines` to describe what a sync would change; the
CLI renders the result with `render_patch` for ``--diff``.
"""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Sequence


def unified_diff_lines(current: str, updated: str, *, label: str) -> list[str]:
    """Return a unified diff between two texts as a list of lines (with terminators).

    Args:
        current (str): Text currently on disk (may be empty for new files).
        updated (str): Text that would be written.
        label (str): Path shown in the ``---``/``+++`` headers.

    Returns:
        list[str]: The diff lines; empty when both texts are identical.
    """
    return list(
        difflib.unified_diff(
            current.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{label} (current)",
            tofile=f"{label} (updated)",
        )
    )


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as a sequence of lines or a
            single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\r\n") for line in patch]

    def process_line(line: str) -> str:
        content = line.replace("\r", "\\r")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.white(content)

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
