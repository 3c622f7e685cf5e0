# topmark:header:start
#
#   project      : json5sync
#   file         : loaders.py
#   file_relpath : src/json5sync/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load and render TOML configuration.

This module provides I/O helpers for reading json5sync configuration from
``json5sync.toml`` and from the ``[tool.json5sync]`` table of ``pyproject.toml``,
and for rendering an effective configuration back to TOML text.

Parsing and rendering are done with `tomlkit`; parsed documents are returned as
plain ``dict`` structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeAlias, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from json5sync.config.keys import Toml
from json5sync.config.logging import get_logger

if TYPE_CHECKING:
    from json5sync.config.logging import Json5SyncLogger

TomlTable: TypeAlias = dict[str, Any]

logger: Json5SyncLogger = get_logger(__name__)


class ConfigLoadError(Exception):
    """A configuration file could not be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path: Path = path
        self.reason: str = reason
        super().__init__(f"Cannot load configuration from {path}: {reason}")


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``json5sync.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(path, str(e)) from e
    except UnicodeDecodeError as e:
        raise ConfigLoadError(path, f"not valid UTF-8 ({e.reason})") from e
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        raise ConfigLoadError(path, str(e)) from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_tool_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the json5sync table of a parsed config file, or None if absent.

    ``pyproject.toml`` carries the settings under ``[tool.json5sync]``; any other
    file is a dedicated json5sync config whose top level is the table.
    """
    if path.name != Toml.PYPROJECT_FILE_NAME:
        return data
    table: Any = data
    for part in Toml.PYPROJECT_SECTION:
        if not isinstance(table, dict) or part not in table:
            return None
        table = table[part]
    return cast("TomlTable", table) if isinstance(table, dict) else None


def discover_config_file(root: Path) -> Path | None:
    """Find the project configuration file in ``root``.

    ``json5sync.toml`` wins over ``pyproject.toml``; a ``pyproject.toml`` only
    counts when it declares a ``[tool.json5sync]`` table.

    Args:
        root (Path): Project root directory.

    Returns:
        Path | None: The configuration file, or None if the project has none.
    """
    candidate: Path = root / Toml.CONFIG_FILE_NAME
    if candidate.is_file():
        logger.debug("Discovered config file: %s", candidate)
        return candidate
    pyproject: Path = root / Toml.PYPROJECT_FILE_NAME
    if pyproject.is_file():
        try:
            data: TomlTable = load_toml_dict(pyproject)
        except ConfigLoadError as e:
            # An unrelated, broken pyproject.toml must not block syncing.
            logger.warning("%s", e)
            return None
        if extract_tool_table(pyproject, data) is not None:
            logger.debug("Discovered [tool.json5sync] in %s", pyproject)
            return pyproject
    return None


def to_toml(data: TomlTable) -> str:
    """Serialize a TOML-compatible dict to TOML text (tomlkit)."""
    return tomlkit.dumps(data)
