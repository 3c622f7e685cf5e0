# topmark:header:start
#
#   project      : json5sync
#   file         : test_extractor.py
#   file_relpath : tests/core/test_extractor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for comment extraction from annotated documents.

Covers trailing-comment detection (including ``//`` inside quoted URLs), the
nesting stack, preceding comment blocks, positional array indices, and the
handling of blank lines and orphaned comments.
"""

from __future__ import annotations

import pytest

from json5sync.core.extractor import (
    NestingStack,
    build_comment_map,
    extract_trailing_comment,
    find_trailing_comment,
    split_trailing_comment,
)
from json5sync.core.types import CommentRecord
from tests.conftest import mark_core, parametrize

pytestmark = pytest.mark.core


def _lines(text: str) -> list[str]:
    return text.splitlines()


# --- Trailing comment detection ---------------------------------------------


@mark_core
@parametrize(
    "line, expected",
    [
        ('  "url": "https://github.com/user/repo", // mirror', "// mirror"),
        ('  "url": "https://github.com/user/repo",', None),
        ('  "a": 1, //x', "//x"),
        ('  "a": 1,   //   spaced   ', "//   spaced"),
        ('  "a": "x//y", // real', "// real"),
        ('  "a//b": true,', None),
        ('  "a": "x\\"//y",', None),
        ('  "a": "x\\"//y", // real', "// real"),
        ('  "a": "x\\\\", // after backslash', "// after backslash"),
        ("  'u': 'http://a', // single", "// single"),
        ("  42, // answer", "// answer"),
        ("  // whole line", "// whole line"),
        ("", None),
    ],
)
def test_extract_trailing_comment(line: str, expected: str | None) -> None:
    """Trailing comments are found outside strings and returned trimmed."""
    assert extract_trailing_comment(line) == expected


@mark_core
def test_find_trailing_comment_skips_marker_inside_string() -> None:
    """The index points at the first marker outside any string literal."""
    line = '"u": "http://a", // c'
    assert find_trailing_comment(line) == line.index("// c")


@mark_core
def test_split_trailing_comment_returns_code_part() -> None:
    """The code part keeps everything before the marker."""
    code, comment = split_trailing_comment('  "deps": [ // pinned')
    assert code == '  "deps": [ '
    assert comment == "// pinned"

    code, comment = split_trailing_comment('  "a": 1,')
    assert code == '  "a": 1,'
    assert comment is None


# --- Nesting stack -----------------------------------------------------------


@mark_core
def test_nesting_stack_paths() -> None:
    """Paths reflect open containers and array indices advance per element."""
    stack = NestingStack()
    assert stack.path == ()
    assert stack.depth == 0
    assert not stack.in_array

    stack.push_object("pnpm")
    assert stack.member_path("onlyBuiltDependencies") == ("pnpm", "onlyBuiltDependencies")

    stack.push_array("onlyBuiltDependencies")
    assert stack.in_array
    assert stack.claim_element_path() == ("pnpm", "onlyBuiltDependencies", 0)
    assert stack.claim_element_path() == ("pnpm", "onlyBuiltDependencies", 1)

    frame = stack.pop()
    assert frame is not None and frame.is_array and frame.next_index == 2
    assert stack.path == ("pnpm",)
    assert stack.pop() is not None
    assert stack.pop() is None


@mark_core
def test_claim_element_path_outside_array_raises() -> None:
    """Claiming an element index is only valid inside an array."""
    stack = NestingStack()
    stack.push_object("a")
    with pytest.raises(ValueError):
        stack.claim_element_path()


# --- Comment map -------------------------------------------------------------


@mark_core
def test_empty_document_yields_empty_map() -> None:
    """Nothing to parse, nothing captured."""
    assert build_comment_map([]) == {}
    assert build_comment_map(["{", "}"]) == {}


@mark_core
def test_preceding_and_trailing_comments() -> None:
    """Whole-line comments attach to the next member; trailing ones to their line."""
    doc = _lines(
        """{
  // package name
  // (published)
  "name": "demo", // npm name
  "private": true,
}"""
    )
    comments = build_comment_map(doc)
    assert comments == {
        ("name",): CommentRecord(
            preceding=("  // package name", "  // (published)"),
            trailing="// npm name",
        ),
    }


@mark_core
def test_members_without_comments_are_not_recorded() -> None:
    """Absence from the map means no comment data for that position."""
    comments = build_comment_map(_lines('{\n  "a": 1,\n  "b": 2,\n}'))
    assert ("a",) not in comments
    assert ("b",) not in comments


@mark_core
def test_placeholder_line_is_captured_as_preceding() -> None:
    """A bare ``//`` line is a regular preceding comment."""
    comments = build_comment_map(_lines('{\n  //\n  "a": 1,\n}'))
    assert comments[("a",)] == CommentRecord(preceding=("  //",))


@mark_core
def test_nested_object_paths() -> None:
    """Members of nested objects get dotted key paths."""
    doc = _lines(
        """{
  "scripts": { // npm scripts
    // run tests
    "test": "vitest",
  },
  // after nested
  "type": "module",
}"""
    )
    comments = build_comment_map(doc)
    assert comments[("scripts",)] == CommentRecord(trailing="// npm scripts")
    assert comments[("scripts", "test")] == CommentRecord(preceding=("    // run tests",))
    assert comments[("type",)] == CommentRecord(preceding=("  // after nested",))


@mark_core
def test_array_elements_get_positional_indices() -> None:
    """Array elements are addressed by index, starting at 0."""
    doc = _lines(
        """{
  "pnpm": {
    "onlyBuiltDependencies": [ // native builds
      // first
      "esbuild",
      "sharp", // second
      42,
      {"inline":true}, // inline object
    ],
  },
}"""
    )
    comments = build_comment_map(doc)
    base = ("pnpm", "onlyBuiltDependencies")
    assert comments[base] == CommentRecord(trailing="// native builds")
    assert comments[(*base, 0)] == CommentRecord(preceding=("      // first",))
    assert comments[(*base, 1)] == CommentRecord(trailing="// second")
    assert (*base, 2) not in comments
    assert comments[(*base, 3)] == CommentRecord(trailing="// inline object")


@mark_core
def test_array_index_resets_per_array() -> None:
    """Each array opener starts counting from zero again."""
    doc = _lines(
        """{
  "a": [
    "x",
    "y", // a1
  ],
  "b": [
    "z", // b0
  ],
}"""
    )
    comments = build_comment_map(doc)
    assert comments[("a", 1)].trailing == "// a1"
    assert comments[("b", 0)].trailing == "// b0"


@mark_core
def test_url_values_are_not_split() -> None:
    """A ``//`` inside a quoted URL never becomes a trailing comment."""
    doc = _lines(
        """{
  "homepage": "https://example.com/docs",
  "repository": "git+https://github.com/user/repo.git", // canonical repo
}"""
    )
    comments = build_comment_map(doc)
    assert ("homepage",) not in comments
    assert comments[("repository",)] == CommentRecord(trailing="// canonical repo")


@mark_core
def test_escaped_quotes_keep_markers_inside_the_value() -> None:
    """``\\"`` does not end a string, so a following ``//`` stays part of the value."""
    doc = _lines(
        r"""{
  "scripts": {
    "dev": "cross-env URL=\"http://localhost\"",
    "start": "node -e \"//x\"", // launcher
  },
}"""
    )
    comments = build_comment_map(doc)
    assert ("scripts", "dev") not in comments
    assert comments[("scripts", "start")] == CommentRecord(trailing="// launcher")


@mark_core
def test_comment_block_jumps_over_blank_lines() -> None:
    """Blank lines between a comment block and its member keep the association."""
    doc = _lines('{\n  // about a\n\n\n  "a": 1,\n}')
    assert build_comment_map(doc)[("a",)] == CommentRecord(preceding=("  // about a",))


@mark_core
def test_orphaned_comments_before_closer_are_dropped() -> None:
    """Comments with no following member in their container attach to nothing."""
    doc = _lines(
        """{
  "a": {
    "x": 1,
    // dangling
  },
  "b": 2,
}"""
    )
    comments = build_comment_map(doc)
    assert comments == {}


@mark_core
def test_key_quoting_styles_are_decoded() -> None:
    """Double-quoted (with escapes), single-quoted and bare keys all resolve."""
    doc = _lines(
        """{
  "caf\\u00e9": 1, // escaped
  'single': 2, // sq
  bare_key: 3, // bare
  "@scope/pkg": "^1.0.0", // scoped
}"""
    )
    comments = build_comment_map(doc)
    assert comments[("café",)].trailing == "// escaped"
    assert comments[("single",)].trailing == "// sq"
    assert comments[("bare_key",)].trailing == "// bare"
    assert comments[("@scope/pkg",)].trailing == "// scoped"


@mark_core
def test_crlf_lines_are_tolerated() -> None:
    """Line terminators left on the input lines do not leak into comments."""
    doc = ["{\r\n", "  // note\r\n", '  "a": 1, // tail\r\n', "}\r\n"]
    assert build_comment_map(doc)[("a",)] == CommentRecord(
        preceding=("  // note",), trailing="// tail"
    )
