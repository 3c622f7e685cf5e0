# topmark:header:start
#
#   project      : json5sync
#   file         : model.py
#   file_relpath : src/json5sync/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and layered resolution.

This module defines:
    - `Config`: an immutable, runtime snapshot used by discovery and the runner.
    - `MutableConfig`: a mutable builder used while layering sources; it can be
      frozen into `Config` and thawed back for edits.

Precedence (lowest to highest):
    1. Built-in defaults (`MutableConfig.from_defaults`).
    2. TOML files: the discovered project file, then explicit ``--config`` files,
       in order (`MutableConfig.merge_toml`).
    3. Environment (`MutableConfig.apply_env`).
    4. CLI overrides (`MutableConfig.apply_overrides`).

The core never reads this module: callers hand it a plain
[`SyncOptions`][json5sync.core.types.SyncOptions] via `Config.sync_options`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from json5sync.config.keys import Env, Toml
from json5sync.config.loaders import (
    discover_config_file,
    extract_tool_table,
    load_toml_dict,
    to_toml,
)
from json5sync.config.logging import get_logger
from json5sync.core.types import SyncOptions

if TYPE_CHECKING:
    from json5sync.config.loaders import TomlTable
    from json5sync.config.logging import Json5SyncLogger

logger: Json5SyncLogger = get_logger(__name__)

_FALSE_VALUES: frozenset[str] = frozenset({"false", "0", "no", "off"})
_TRUE_VALUES: frozenset[str] = frozenset({"true", "1", "yes", "on"})

# (section, key) -> MutableConfig attribute and the expected value kind
_TOML_FIELDS: dict[tuple[str, str], tuple[str, str]] = {
    (Toml.SECTION_SYNC, Toml.KEY_ADD_EMPTY_COMMENT): ("add_empty_comment", "bool"),
    (Toml.SECTION_SYNC, Toml.KEY_COMPANION_SUFFIX): ("companion_suffix", "str"),
    (Toml.SECTION_SYNC, Toml.KEY_CREATE_MISSING): ("create_missing", "bool"),
    (Toml.SECTION_FILES, Toml.KEY_CANONICAL_NAMES): ("canonical_names", "list"),
    (Toml.SECTION_FILES, Toml.KEY_EXCLUDE_DIRS): ("exclude_dirs", "list"),
    (Toml.SECTION_FILES, Toml.KEY_EXCLUDE_PATTERNS): ("exclude_patterns", "list"),
    (Toml.SECTION_FILES, Toml.KEY_RESPECT_GITIGNORE): ("respect_gitignore", "bool"),
}


def parse_bool_text(value: str | None) -> bool | None:
    """Parse a textual boolean (``false/0/no/off`` or ``true/1/yes/on``).

    Returns:
        bool | None: The parsed value, or None when ``value`` is unset or unrecognized.
    """
    if value is None:
        return None
    v = value.strip().lower()
    if v in _FALSE_VALUES:
        return False
    if v in _TRUE_VALUES:
        return True
    return None


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for json5sync.

    Attributes:
        add_empty_comment (bool): Insert a placeholder ``//`` line above members and
            elements that have no captured comment.
        companion_suffix (str): Suffix appended to a canonical path to obtain its
            annotated companion (``package.json`` + ``"5"``).
        canonical_names (tuple[str, ...]): File names searched for as canonical documents.
        exclude_dirs (tuple[str, ...]): Directory names never descended into.
        exclude_patterns (tuple[str, ...]): Gitwildmatch patterns (relative to the
            project root) excluding canonical files.
        respect_gitignore (bool): Skip canonical files ignored by the root ``.gitignore``.
        create_missing (bool): Create companions that do not exist yet.
        config_files (tuple[Path, ...]): Configuration files merged into this snapshot.
    """

    add_empty_comment: bool
    companion_suffix: str
    canonical_names: tuple[str, ...]
    exclude_dirs: tuple[str, ...]
    exclude_patterns: tuple[str, ...]
    respect_gitignore: bool
    create_missing: bool
    config_files: tuple[Path, ...]

    def sync_options(self) -> SyncOptions:
        """Return the explicit options handed to the core for each run."""
        return SyncOptions(add_empty_comment_if_missing=self.add_empty_comment)

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this snapshot."""
        return MutableConfig(
            add_empty_comment=self.add_empty_comment,
            companion_suffix=self.companion_suffix,
            canonical_names=list(self.canonical_names),
            exclude_dirs=list(self.exclude_dirs),
            exclude_patterns=list(self.exclude_patterns),
            respect_gitignore=self.respect_gitignore,
            create_missing=self.create_missing,
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Convert this snapshot into a TOML-serializable dict."""
        return {
            Toml.SECTION_SYNC: {
                Toml.KEY_ADD_EMPTY_COMMENT: self.add_empty_comment,
                Toml.KEY_COMPANION_SUFFIX: self.companion_suffix,
                Toml.KEY_CREATE_MISSING: self.create_missing,
            },
            Toml.SECTION_FILES: {
                Toml.KEY_CANONICAL_NAMES: list(self.canonical_names),
                Toml.KEY_EXCLUDE_DIRS: list(self.exclude_dirs),
                Toml.KEY_EXCLUDE_PATTERNS: list(self.exclude_patterns),
                Toml.KEY_RESPECT_GITIGNORE: self.respect_gitignore,
            },
        }

    def to_toml(self) -> str:
        """Render this snapshot as TOML text."""
        return to_toml(self.to_toml_dict())


# ------------------ Mutable builder ------------------


@dataclass
class MutableConfig:
    """Mutable configuration builder; see the module docstring for precedence."""

    add_empty_comment: bool = True
    companion_suffix: str = "5"
    canonical_names: list[str] = field(default_factory=lambda: ["package.json"])
    exclude_dirs: list[str] = field(default_factory=lambda: ["node_modules"])
    exclude_patterns: list[str] = field(default_factory=list)
    respect_gitignore: bool = True
    create_missing: bool = False
    config_files: list[Path] = field(default_factory=list)

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls()

    @classmethod
    def load_merged(
        cls,
        root: Path,
        *,
        config_paths: tuple[Path, ...] | list[Path] = (),
        no_config: bool = False,
    ) -> MutableConfig:
        """Build a configuration from defaults and TOML files.

        Args:
            root (Path): Project root searched for ``json5sync.toml`` / ``pyproject.toml``.
            config_paths (tuple[Path, ...] | list[Path]): Extra config files merged
                after the discovered one, in order.
            no_config (bool): Skip discovery of the project config file (explicit
                ``config_paths`` are still merged).

        Returns:
            MutableConfig: The merged builder (environment and CLI not applied yet).

        Raises:
            ConfigLoadError: If an explicit config file cannot be loaded.
        """
        draft: MutableConfig = cls.from_defaults()
        sources: list[Path] = []
        if not no_config:
            discovered: Path | None = discover_config_file(root)
            if discovered is not None:
                sources.append(discovered)
        sources.extend(Path(p) for p in config_paths)

        for path in sources:
            data: TomlTable = load_toml_dict(path)
            table: TomlTable | None = extract_tool_table(path, data)
            if table is None:
                logger.warning("No [tool.json5sync] table in %s; ignoring it", path)
                continue
            draft.merge_toml(table, source=path)
        return draft

    def merge_toml(self, table: Mapping[str, Any], *, source: Path | None = None) -> None:
        """Overlay the values of a json5sync TOML table onto this builder.

        Unknown sections/keys and wrongly typed values are logged and ignored.

        Args:
            table (Mapping[str, Any]): The json5sync table (``[sync]``, ``[files]``).
            source (Path | None): File the table came from (provenance and logs).
        """
        origin: str = str(source) if source else "<toml>"
        for section_name, section in table.items():
            if not isinstance(section, Mapping):
                logger.warning("%s: ignoring non-table entry '%s'", origin, section_name)
                continue
            for key, value in section.items():
                target = _TOML_FIELDS.get((section_name, key))
                if target is None:
                    logger.warning("%s: unknown setting '%s.%s'", origin, section_name, key)
                    continue
                attr, kind = target
                coerced: Any = _coerce(value, kind)
                if coerced is None:
                    logger.warning(
                        "%s: '%s.%s' expects a %s, got %r; ignoring it",
                        origin,
                        section_name,
                        key,
                        kind,
                        value,
                    )
                    continue
                setattr(self, attr, coerced)
                logger.debug("%s: %s.%s = %r", origin, section_name, key, coerced)
        if source is not None:
            self.config_files.append(source)

    def apply_env(self, environ: Mapping[str, str] | None = None) -> None:
        """Apply environment toggles (``JSON5SYNC_ADD_EMPTY_COMMENT``).

        Args:
            environ (Mapping[str, str] | None): Environment to read; defaults to
                ``os.environ``.
        """
        env = os.environ if environ is None else environ
        raw: str | None = env.get(Env.ADD_EMPTY_COMMENT)
        if raw is None:
            return
        value: bool | None = parse_bool_text(raw)
        if value is None:
            logger.warning("Ignoring %s=%r (expected true/false)", Env.ADD_EMPTY_COMMENT, raw)
            return
        self.add_empty_comment = value

    def apply_overrides(self, overrides: Mapping[str, Any]) -> None:
        """Apply explicit overrides (CLI/API); ``None`` values mean "not given".

        Args:
            overrides (Mapping[str, Any]): Attribute names mapped to values.
        """
        for attr, value in overrides.items():
            if value is None:
                continue
            if not hasattr(self, attr):
                raise AttributeError(f"Unknown configuration attribute: {attr}")
            if isinstance(getattr(self, attr), list):
                value = list(value)
            setattr(self, attr, value)

    def freeze(self) -> Config:
        """Return an immutable `Config` snapshot of this builder."""
        return Config(
            add_empty_comment=self.add_empty_comment,
            companion_suffix=self.companion_suffix,
            canonical_names=tuple(self.canonical_names),
            exclude_dirs=tuple(self.exclude_dirs),
            exclude_patterns=tuple(self.exclude_patterns),
            respect_gitignore=self.respect_gitignore,
            create_missing=self.create_missing,
            config_files=tuple(self.config_files),
        )


def _coerce(value: Any, kind: str) -> Any:
    """Return ``value`` converted to ``kind``, or None if it has the wrong type."""
    if kind == "bool":
        return value if isinstance(value, bool) else None
    if kind == "str":
        return value if isinstance(value, str) and value else None
    if kind == "list":
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            return list(value)
        return None
    raise ValueError(f"Unknown setting kind: {kind}")
