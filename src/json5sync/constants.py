# topmark:header:start
#
#   project      : json5sync
#   file         : constants.py
#   file_relpath : src/json5sync/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

JSON5SYNC_VERSION: str = get_version("json5sync")

TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="
