# topmark:header:start
#
#   project      : json5sync
#   file         : dump_config.py
#   file_relpath : src/json5sync/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync `dump-config` command.

Emits the effective configuration as TOML after applying defaults, the project
config file, explicit ``--config`` files, the environment and the placeholder
flags. The TOML is wrapped between BEGIN/END markers for easy parsing in tests
or tooling.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from json5sync.cli.cmd_common import build_config
from json5sync.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    empty_comment_options,
    resolve_empty_comment_flag,
)
from json5sync.config.logging import get_logger
from json5sync.constants import TOML_BLOCK_END, TOML_BLOCK_START

if TYPE_CHECKING:
    from json5sync.cli.console import ConsoleLike
    from json5sync.config import Config
    from json5sync.config.logging import Json5SyncLogger

logger: Json5SyncLogger = get_logger(__name__)


@click.command(
    name="dump-config",
    help="Dump the effective json5sync configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@empty_comment_options
@click.pass_context
def dump_config_command(
    ctx: click.Context,
    *,
    no_config: bool,
    config_paths: tuple[str, ...],
    no_empty_comment: bool,
    empty_comment: bool | None,
) -> None:
    """Print the merged configuration, wrapped in BEGIN/END markers."""
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    config: Config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        overrides={
            "add_empty_comment": resolve_empty_comment_flag(
                no_empty_comment=no_empty_comment, empty_comment=empty_comment
            ),
        },
    )
    logger.debug("Config sources: %s", [str(p) for p in config.config_files])

    console.print(TOML_BLOCK_START)
    console.print(config.to_toml().rstrip("\n"))
    console.print(TOML_BLOCK_END)
