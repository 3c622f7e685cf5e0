# topmark:header:start
#
#   project      : json5sync
#   file         : cmd_common.py
#   file_relpath : src/json5sync/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Plumbing shared by CLI commands.

These helpers avoid policy (messages, exit code rules); they resolve the
effective configuration and read shared state from the Click context.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from json5sync.cli.errors import Json5SyncConfigError
from json5sync.config import ConfigLoadError, MutableConfig
from json5sync.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    import click

    from json5sync.config import Config
    from json5sync.config.logging import Json5SyncLogger

logger: Json5SyncLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored by the group (0 when unset)."""
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    return int(obj.get("verbosity_level", 0))


def build_config(
    *,
    root: Path | None = None,
    no_config: bool,
    config_paths: Sequence[str],
    overrides: Mapping[str, Any],
) -> Config:
    """Resolve the effective configuration for a command.

    Layers defaults, TOML files, the environment and ``overrides`` (CLI values;
    None entries are ignored), in increasing precedence.

    Args:
        root (Path | None): Project root; defaults to the current directory.
        no_config (bool): Skip discovery of the project config file.
        config_paths (Sequence[str]): Explicit config files, merged in order.
        overrides (Mapping[str, Any]): CLI values keyed by config attribute.

    Returns:
        Config: The frozen configuration.

    Raises:
        Json5SyncConfigError: If a config file cannot be read or parsed.
    """
    base: Path = root or Path.cwd()
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            base,
            config_paths=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigLoadError as e:
        raise Json5SyncConfigError(str(e)) from e
    draft.apply_env()
    draft.apply_overrides(overrides)
    config: Config = draft.freeze()
    logger.trace("Effective config: %s", config)
    return config
