# topmark:header:start
#
#   project      : json5sync
#   file         : __init__.py
#   file_relpath : src/json5sync/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync: keep an annotated JSON5 companion in sync with its canonical JSON.

The public API re-exports the pure core (extractor and regenerator) together
with the file-level runner:

    >>> from json5sync import sync_json5
    >>> print(sync_json5(None, {"name": "demo"}))
    {
      //
      "name": "demo",
    }
"""

from __future__ import annotations

from json5sync.core import (
    CommentMap,
    CommentRecord,
    Json5SyncError,
    KeyPath,
    SyncOptions,
    UnsupportedValueError,
    build_comment_map,
    render_json5,
    sync_json5,
)
from json5sync.runner import SyncResult, SyncStatus, sync_pair, sync_pairs

__all__ = [
    "CommentMap",
    "CommentRecord",
    "Json5SyncError",
    "KeyPath",
    "SyncOptions",
    "SyncResult",
    "SyncStatus",
    "UnsupportedValueError",
    "build_comment_map",
    "render_json5",
    "sync_json5",
    "sync_pair",
    "sync_pairs",
]
