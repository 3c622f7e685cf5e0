# topmark:header:start
#
#   project      : json5sync
#   file         : extractor.py
#   file_relpath : src/json5sync/core/extractor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Comment extraction for annotated (JSON5) documents.

This module parses an existing annotated document line by line and builds a
[`CommentMap`][json5sync.core.types.CommentMap]: a mapping from structural
position (`KeyPath`) to the comments attached to that position.

Handled:
    - Preceding ``//`` comment lines directly above a member or array element.
      Blank lines do not break the association: a comment block may "jump" over
      blank lines to reach the next structural line.
    - Trailing ``//`` comments on the same line as a member, an array element or
      a container's opening token.
    - Nested objects/arrays via an explicit [`NestingStack`][json5sync.core.extractor.NestingStack].
    - Array elements with positional indices (``deps.0``, ``deps.1``, ...).

Limitations:
    - Only line comments are recognized; block comments are treated as content.
    - Trailing-comment detection follows string literals (double or single
      quoted, backslash escapes honored). An unterminated string hides the rest
      of the line.
    - Lines that cannot be classified never raise; at worst one comment block is
      dropped.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from json5sync.config.logging import get_logger
from json5sync.core.types import COMMENT_MARKER, CommentRecord, format_keypath

if TYPE_CHECKING:
    from collections.abc import Iterable

    from json5sync.config.logging import Json5SyncLogger
    from json5sync.core.types import CommentMap, KeyPath, KeySegment

logger: Json5SyncLogger = get_logger(__name__)

_CLOSERS: Final[frozenset[str]] = frozenset({"}", "},", "]", "],"})
_QUOTES: Final[frozenset[str]] = frozenset({'"', "'"})

# A member key: "double quoted" (JSON escapes), 'single quoted' or a bare identifier.
_KEY_PATTERN: Final[str] = (
    r"""^\s*(?:"(?P<dq>(?:[^"\\]|\\.)*)"|'(?P<sq>(?:[^'\\]|\\.)*)'|(?P<bare>[A-Za-z_$][\w$-]*))"""
    r"""\s*:"""
)
_MEMBER_RE: Final[re.Pattern[str]] = re.compile(_KEY_PATTERN)
_ARRAY_START_RE: Final[re.Pattern[str]] = re.compile(_KEY_PATTERN + r"""\s*\[\s*$""")


@dataclass(slots=True)
class Frame:
    """One open container on the nesting stack.

    Attributes:
        segment (KeySegment): Key (object member) or index (array element) under
            which the container was opened.
        is_array (bool): True when the container is an array.
        next_index (int): Index the next element of this array will receive.
    """

    segment: KeySegment
    is_array: bool
    next_index: int = 0


class NestingStack:
    """Explicit stack of open containers used to resolve key paths.

    The stack is inspectable (see `frames` and `path`) so tests can assert
    intermediate path resolution while a document is being scanned.
    """

    def __init__(self) -> None:
        self._frames: list[Frame] = []

    def __repr__(self) -> str:
        return f"NestingStack(path={format_keypath(self.path)!r}, in_array={self.in_array})"

    @property
    def frames(self) -> tuple[Frame, ...]:
        """Snapshot of the open frames, outermost first."""
        return tuple(self._frames)

    @property
    def depth(self) -> int:
        """Number of open containers."""
        return len(self._frames)

    @property
    def in_array(self) -> bool:
        """True when the innermost open container is an array."""
        return bool(self._frames) and self._frames[-1].is_array

    @property
    def path(self) -> KeyPath:
        """Key path of the innermost open container (empty at top level)."""
        return tuple(frame.segment for frame in self._frames)

    def member_path(self, key: str) -> KeyPath:
        """Return the key path of member ``key`` in the current container."""
        return (*self.path, key)

    def claim_element_path(self) -> KeyPath:
        """Return the key path of the next element of the current array and advance.

        Returns:
            KeyPath: Current container path plus the element index.

        Raises:
            ValueError: If the innermost container is not an array.
        """
        if not self.in_array:
            raise ValueError("claim_element_path() called outside of an array")
        top: Frame = self._frames[-1]
        index: int = top.next_index
        top.next_index += 1
        return (*self.path, index)

    def push_object(self, segment: KeySegment) -> None:
        """Open an object container under ``segment``."""
        self._frames.append(Frame(segment=segment, is_array=False))

    def push_array(self, segment: KeySegment) -> None:
        """Open an array container under ``segment``; its first element gets index 0."""
        self._frames.append(Frame(segment=segment, is_array=True))

    def pop(self) -> Frame | None:
        """Close the innermost container; no-op (returns None) when the stack is empty."""
        if not self._frames:
            return None
        return self._frames.pop()


def find_trailing_comment(line: str) -> int | None:
    """Return the index of the first comment marker outside a string literal.

    Scans left to right, tracking whether the cursor is inside a double- or
    single-quoted string. Inside a string a backslash escapes the next
    character, so ``\\"`` does not close it. A ``//`` met inside a string (a URL,
    a shell command) belongs to the value.

    Args:
        line (str): A single line of the annotated document.

    Returns:
        int | None: Index of the comment marker, or None if the line has no
            trailing comment.
    """
    quote: str | None = None
    escaped: bool = False
    for idx, ch in enumerate(line):
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif line.startswith(COMMENT_MARKER, idx):
            return idx
    return None


def extract_trailing_comment(line: str) -> str | None:
    """Return the trailing comment of ``line`` (marker included, trimmed), or None.

    Examples:
        - ``"url": "https://github.com/user/repo", // mirror`` → ``"// mirror"``
        - ``"url": "https://github.com/user/repo",`` → ``None``
    """
    idx: int | None = find_trailing_comment(line)
    if idx is None:
        return None
    return line[idx:].strip()


def split_trailing_comment(line: str) -> tuple[str, str | None]:
    """Split ``line`` into its code part and its trailing comment (if any)."""
    idx: int | None = find_trailing_comment(line)
    if idx is None:
        return line, None
    return line[:idx], line[idx:].strip()


def _decode_key(match: re.Match[str]) -> str:
    """Return the member key captured by one of the key patterns."""
    dq: str | None = match.group("dq")
    if dq is not None:
        try:
            decoded: object = json.loads(f'"{dq}"')
        except ValueError:
            return dq
        return decoded if isinstance(decoded, str) else dq
    sq: str | None = match.group("sq")
    if sq is not None:
        return sq.replace("\\'", "'")
    return match.group("bare")


def build_comment_map(lines: Iterable[str]) -> CommentMap:
    """Parse an annotated document and map key paths to their comments.

    Rules, per line:
        1. Blank lines are skipped and keep the pending comment buffer.
        2. Whole-line comments are appended verbatim to the pending buffer.
        3. The trailing comment is split off and the code part is classified:
           closing token (pop one level), array opener under a key, anonymous
           container or element inside an array, object member. Structural lines
           record the pending buffer and trailing comment at their key path.
        4. Any other line discards the pending buffer (orphaned comments).

    A record is stored only when it carries at least one preceding comment or a
    trailing comment.

    Args:
        lines (Iterable[str]): Lines of the existing annotated document (line
            terminators are tolerated).

    Returns:
        CommentMap: Mapping from key path to captured comments. Empty for an
            empty document.
    """
    comments: CommentMap = {}
    stack = NestingStack()
    pending: list[str] = []

    def _record(path: KeyPath, trailing: str | None) -> None:
        record = CommentRecord(preceding=tuple(pending), trailing=trailing)
        if not record.is_empty():
            comments[path] = record
            logger.trace("Captured comments for '%s': %s", format_keypath(path), record)
        pending.clear()

    for lineno, raw_line in enumerate(lines, 1):
        line: str = raw_line.rstrip("\r\n")
        stripped: str = line.strip()

        if not stripped:
            continue

        if stripped.startswith(COMMENT_MARKER):
            pending.append(line)
            continue

        code, trailing = split_trailing_comment(line)
        code_stripped: str = code.strip()

        if code_stripped in _CLOSERS:
            if pending:
                logger.debug("Line %d: dropping %d comment line(s) before closer", lineno, len(pending))
                pending.clear()
            stack.pop()
            continue

        match: re.Match[str] | None = _ARRAY_START_RE.match(code)
        if match:
            key: str = _decode_key(match)
            _record(stack.member_path(key), trailing)
            stack.push_array(key)
            continue

        if stack.in_array:
            if code_stripped in ("{", "["):
                path: KeyPath = stack.claim_element_path()
                _record(path, trailing)
                if code_stripped == "[":
                    stack.push_array(path[-1])
                else:
                    stack.push_object(path[-1])
                continue
            if not _MEMBER_RE.match(code):
                _record(stack.claim_element_path(), trailing)
                continue

        match = _MEMBER_RE.match(code)
        if match:
            key = _decode_key(match)
            _record(stack.member_path(key), trailing)
            if code_stripped.endswith("{"):
                stack.push_object(key)
            continue

        if pending:
            logger.debug(
                "Line %d: dropping %d orphaned comment line(s) before %r",
                lineno,
                len(pending),
                stripped,
            )
            pending.clear()

    logger.debug("Built comment map with %d record(s)", len(comments))
    return comments
