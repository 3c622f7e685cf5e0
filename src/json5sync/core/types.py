# topmark:header:start
#
#   project      : json5sync
#   file         : types.py
#   file_relpath : src/json5sync/core/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data shapes shared by the comment extractor and the regenerator.

Exports:
    - `KeyPath`: position of a value in a structured tree, as a tuple of
      segments (``str`` for object members, ``int`` for array elements).
    - `CommentRecord`: comments attached to one `KeyPath`.
    - `CommentMap`: mapping from `KeyPath` to `CommentRecord`.
    - `SyncOptions`: explicit options for a synchronization run.

Design notes:
    - A `CommentMap` only holds records that carry data. Presence of a key means
      "comment info was captured for this position"; absence means the position
      was never seen in the annotated document. The regenerator relies on this
      distinction for its placeholder policy.
    - Array segments are positional: index 0 maps to index 0 across runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

COMMENT_MARKER: Final[str] = "//"

#: Line emitted for positions lacking a captured comment (visual spacer).
PLACEHOLDER_COMMENT: Final[str] = COMMENT_MARKER

KeySegment: TypeAlias = str | int
KeyPath: TypeAlias = tuple[KeySegment, ...]


@dataclass(frozen=True, slots=True)
class CommentRecord:
    """Comments associated with exactly one position in the document.

    Attributes:
        preceding (tuple[str, ...]): Whole-line comments found directly above the
            value, verbatim (original indentation included).
        trailing (str | None): Comment found on the same line as the value's
            opening token, trimmed and starting with the comment marker.
    """

    preceding: tuple[str, ...] = ()
    trailing: str | None = None

    def is_empty(self) -> bool:
        """Return True when the record carries no comment data."""
        return not self.preceding and not self.trailing


CommentMap: TypeAlias = dict[KeyPath, CommentRecord]


@dataclass(frozen=True, slots=True)
class SyncOptions:
    """Options for a single synchronization run.

    Attributes:
        add_empty_comment_if_missing (bool): When True, emit a placeholder comment
            line (``//``) above every member or element whose position has no
            captured comment record.
    """

    add_empty_comment_if_missing: bool = True


def format_keypath(path: KeyPath) -> str:
    """Render a key path as a dot-joined string for log and error messages.

    Args:
        path (KeyPath): The key path to render.

    Returns:
        str: E.g. ``"pnpm.onlyBuiltDependencies.0"``; empty string for the root.
    """
    return ".".join(str(segment) for segment in path)
