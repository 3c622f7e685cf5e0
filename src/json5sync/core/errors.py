# topmark:header:start
#
#   project      : json5sync
#   file         : errors.py
#   file_relpath : src/json5sync/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the json5sync core.

The core raises only for contract violations (unsupported canonical shapes).
Parsing ambiguity in annotated documents is always resolved leniently and never
surfaces as an exception.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from json5sync.core.types import format_keypath

if TYPE_CHECKING:
    from json5sync.core.types import KeyPath


class Json5SyncError(Exception):
    """Base class for all json5sync core errors."""


class UnsupportedValueError(Json5SyncError, TypeError):
    """A canonical value cannot be represented in the annotated document.

    Attributes:
        path (KeyPath): Position of the offending value in the canonical tree.
        value (object): The offending value.
    """

    def __init__(self, path: KeyPath, value: object, reason: str | None = None) -> None:
        self.path: KeyPath = path
        self.value: object = value
        where: str = format_keypath(path) or "<root>"
        detail: str = reason or f"unsupported value of type {type(value).__name__}"
        super().__init__(f"{detail} at '{where}'")
