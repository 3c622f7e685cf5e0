# topmark:header:start
#
#   project      : json5sync
#   file         : regenerator.py
#   file_relpath : src/json5sync/core/regenerator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Regenerate an annotated (JSON5) document from canonical data.

The canonical tree is the source of truth; the annotated document is rebuilt
from scratch on every run with stable formatting:

- 2-space indentation per nesting level;
- every key is double-quoted;
- every member and every array element ends with a comma, including the last
  one in its container (cleaner diffs);
- members are written in the canonical tree's insertion order.

Comments captured by [`build_comment_map`][json5sync.core.extractor.build_comment_map]
are re-attached by key path. Positions without a captured record optionally get
a placeholder ``//`` line (see [`SyncOptions`][json5sync.core.types.SyncOptions]).

Blank lines and the original member order of the annotated document are not
preserved. Array elements are matched by index only: when the canonical array
gains, loses or reorders elements, comments stay with the index, not with the
value.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

from json5sync.config.logging import get_logger
from json5sync.core.errors import UnsupportedValueError
from json5sync.core.extractor import build_comment_map
from json5sync.core.types import PLACEHOLDER_COMMENT, SyncOptions

if TYPE_CHECKING:
    from json5sync.config.logging import Json5SyncLogger
    from json5sync.core.types import CommentMap, CommentRecord, KeyPath

logger: Json5SyncLogger = get_logger(__name__)

INDENT_SIZE: Final[int] = 2

_SCALAR_TYPES: Final[tuple[type, ...]] = (str, int, float, bool)

# Only real line terminators; str.splitlines() would also break on U+2028 and friends,
# which may appear verbatim inside string literals.
_LINE_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"\r\n|\r|\n")


def indent(line: str, level: int = 0) -> str:
    """Return ``line`` trimmed and indented by ``level`` spaces."""
    return " " * level + line.strip()


def quote_key(key: str) -> str:
    """Return ``key`` as a double-quoted JSON string (always quoted for consistency)."""
    return json.dumps(key, ensure_ascii=False)


def _to_plain(value: Any, path: KeyPath) -> Any:
    """Return ``value`` as plain ``dict``/``list``/scalar data for `json.dumps`.

    Raises:
        UnsupportedValueError: Unless ``value`` is a JSON-compatible tree.
    """
    if value is None:
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedValueError(path, value, f"non-finite number {value!r}")
        return value
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, Mapping):
        plain: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    (*path, str(key)), key, f"object key of type {type(key).__name__}"
                )
            plain[key] = _to_plain(item, (*path, key))
        return plain
    if isinstance(value, (list, tuple)):
        return [_to_plain(item, (*path, index)) for index, item in enumerate(value)]
    raise UnsupportedValueError(path, value)


def format_literal(value: Any, path: KeyPath = ()) -> str:
    """Render ``value`` as a compact single-line JSON literal.

    Args:
        value (Any): A scalar, or a nested mapping/list (rendered inline).
        path (KeyPath): Position of ``value``, used in error messages.

    Returns:
        str: The literal, e.g. ``"glob"``, ``42``, ``true``, ``{"a":1}``.

    Raises:
        UnsupportedValueError: If ``value`` (or anything nested in it) is not a
            JSON-compatible value.
    """
    plain: Any = _to_plain(value, path)
    return json.dumps(plain, ensure_ascii=False, separators=(",", ":"), allow_nan=False)


def _with_trailing(line: str, record: CommentRecord | None) -> str:
    if record is not None and record.trailing:
        return f"{line} {record.trailing}"
    return line


class _Renderer:
    """Walks a canonical tree and accumulates annotated output lines."""

    def __init__(self, comments: CommentMap, options: SyncOptions) -> None:
        self.comments: CommentMap = comments
        self.options: SyncOptions = options
        self.lines: list[str] = []

    def emit_leading(self, path: KeyPath, level: int) -> CommentRecord | None:
        """Emit the preceding comments of ``path`` (or a placeholder) and return its record."""
        record: CommentRecord | None = self.comments.get(path)
        if record is not None and record.preceding:
            for comment in record.preceding:
                self.lines.append(indent(comment, level))
        elif record is None and self.options.add_empty_comment_if_missing:
            self.lines.append(indent(PLACEHOLDER_COMMENT, level))
        return record

    def write_object(self, obj: Mapping[str, Any], path: KeyPath, level: int) -> None:
        for key, value in obj.items():
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    (*path, str(key)), key, f"object key of type {type(key).__name__}"
                )
            member_path: KeyPath = (*path, key)
            record: CommentRecord | None = self.emit_leading(member_path, level)

            if isinstance(value, Mapping):
                self.lines.append(indent(_with_trailing(f"{quote_key(key)}: {{", record), level))
                self.write_object(value, member_path, level + INDENT_SIZE)
                self.lines.append(indent("},", level))
            elif isinstance(value, (list, tuple)):
                self.lines.append(indent(_with_trailing(f"{quote_key(key)}: [", record), level))
                self.write_array(value, member_path, level + INDENT_SIZE)
                self.lines.append(indent("],", level))
            else:
                literal: str = format_literal(value, member_path)
                self.lines.append(
                    indent(_with_trailing(f"{quote_key(key)}: {literal},", record), level)
                )

    def write_array(self, items: list[Any] | tuple[Any, ...], path: KeyPath, level: int) -> None:
        for index, item in enumerate(items):
            item_path: KeyPath = (*path, index)
            record: CommentRecord | None = self.emit_leading(item_path, level)
            literal: str = format_literal(item, item_path)
            self.lines.append(indent(_with_trailing(f"{literal},", record), level))


def render_json5(
    source: Mapping[str, Any],
    comments: CommentMap,
    options: SyncOptions | None = None,
) -> str:
    """Render the annotated document for ``source`` with ``comments`` re-attached.

    Args:
        source (Mapping[str, Any]): Canonical data (top-level object). Not mutated.
        comments (CommentMap): Comments captured from the previous annotated document.
        options (SyncOptions | None): Placeholder policy; defaults to `SyncOptions()`.

    Returns:
        str: The complete document, from the opening ``{`` line to the closing
            ``}`` line, without a final newline.

    Raises:
        UnsupportedValueError: If the root is not a mapping or the tree holds a
            value that cannot be represented.
    """
    if not isinstance(source, Mapping):
        raise UnsupportedValueError((), source, "canonical document root must be an object")
    renderer = _Renderer(comments, options or SyncOptions())
    renderer.write_object(source, (), INDENT_SIZE)
    logger.debug(
        "Rendered %d line(s) from %d comment record(s)", len(renderer.lines), len(comments)
    )
    return "\n".join(["{", *renderer.lines, "}"])


def sync_json5(
    raw: str | None,
    source: Mapping[str, Any],
    options: SyncOptions | None = None,
) -> str:
    """Synchronize an annotated document with its canonical data.

    This is the main entry point of the core: it parses the existing annotated
    text for comments, then regenerates the whole document from ``source``.

    Args:
        raw (str | None): Existing annotated text; None or empty means no comments
            are available.
        source (Mapping[str, Any]): Canonical data (top-level object).
        options (SyncOptions | None): Placeholder policy; defaults to `SyncOptions()`.

    Returns:
        str: The regenerated annotated document (no final newline).
    """
    comments: CommentMap = build_comment_map(_LINE_BREAK_RE.split(raw or ""))
    return render_json5(source, comments, options)
