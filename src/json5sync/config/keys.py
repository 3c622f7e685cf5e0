# topmark:header:start
#
#   project      : json5sync
#   file         : keys.py
#   file_relpath : src/json5sync/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section/key names and environment variables for json5sync.

Keys defined here are the external configuration API (``json5sync.toml`` and
``[tool.json5sync]`` in ``pyproject.toml``); renaming or removing one is a
breaking change. CLI option names are defined next to the Click commands.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML file names, section names and keys used by json5sync configuration."""

    # Discovery
    CONFIG_FILE_NAME: Final[str] = "json5sync.toml"
    PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
    PYPROJECT_SECTION: Final[tuple[str, str]] = ("tool", "json5sync")

    # [sync]
    SECTION_SYNC: Final[str] = "sync"

    KEY_ADD_EMPTY_COMMENT: Final[str] = "add_empty_comment"
    KEY_COMPANION_SUFFIX: Final[str] = "companion_suffix"
    KEY_CREATE_MISSING: Final[str] = "create_missing"

    # [files]
    SECTION_FILES: Final[str] = "files"

    KEY_CANONICAL_NAMES: Final[str] = "canonical_names"
    KEY_EXCLUDE_DIRS: Final[str] = "exclude_dirs"
    KEY_EXCLUDE_PATTERNS: Final[str] = "exclude_patterns"
    KEY_RESPECT_GITIGNORE: Final[str] = "respect_gitignore"


class Env:
    """Environment variables recognized by the configuration layer."""

    ADD_EMPTY_COMMENT: Final[str] = "JSON5SYNC_ADD_EMPTY_COMMENT"
