# topmark:header:start
#
#   project      : json5sync
#   file         : __init__.py
#   file_relpath : src/json5sync/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core comment-preserving merge for JSON5 companion documents.

The core is made of two pure components:

- [`build_comment_map`][json5sync.core.extractor.build_comment_map] parses an
  existing annotated document into a position-indexed comment map.
- [`render_json5`][json5sync.core.regenerator.render_json5] regenerates the
  annotated document from canonical data, re-attaching captured comments.

Neither performs I/O nor reads ambient state (environment, CLI flags); options
are passed explicitly as [`SyncOptions`][json5sync.core.types.SyncOptions].
"""

from __future__ import annotations

from json5sync.core.errors import Json5SyncError, UnsupportedValueError
from json5sync.core.extractor import (
    NestingStack,
    build_comment_map,
    extract_trailing_comment,
    find_trailing_comment,
)
from json5sync.core.regenerator import render_json5, sync_json5
from json5sync.core.types import CommentMap, CommentRecord, KeyPath, SyncOptions, format_keypath

__all__ = [
    "CommentMap",
    "CommentRecord",
    "Json5SyncError",
    "KeyPath",
    "NestingStack",
    "SyncOptions",
    "UnsupportedValueError",
    "build_comment_map",
    "extract_trailing_comment",
    "find_trailing_comment",
    "format_keypath",
    "render_json5",
    "sync_json5",
]
