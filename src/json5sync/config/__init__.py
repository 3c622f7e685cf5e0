# topmark:header:start
#
#   project      : json5sync
#   file         : __init__.py
#   file_relpath : src/json5sync/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration layer for json5sync.

Re-exports the configuration model and its loaders so callers can write
``from json5sync.config import Config, MutableConfig``.
"""

from __future__ import annotations

from json5sync.config.loaders import ConfigLoadError, load_toml_dict
from json5sync.config.model import Config, MutableConfig, parse_bool_text

__all__ = [
    "Config",
    "ConfigLoadError",
    "MutableConfig",
    "load_toml_dict",
    "parse_bool_text",
]
