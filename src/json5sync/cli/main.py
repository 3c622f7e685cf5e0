# topmark:header:start
#
#   project      : json5sync
#   file         : main.py
#   file_relpath : src/json5sync/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync command-line entry point.

Group-level options (verbosity, color) are resolved once and stored on
``ctx.obj`` together with the console, so subcommands share the same state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from json5sync.cli.commands.dump_config import dump_config_command
from json5sync.cli.commands.sync import sync_command
from json5sync.cli.commands.version import version_command
from json5sync.cli.console import ClickConsole
from json5sync.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from json5sync.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from json5sync.cli.console import ConsoleLike
    from json5sync.config.logging import Json5SyncLogger

logger: Json5SyncLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on the context.

    Args:
        ctx (click.Context): Current Click context; ``obj`` and ``color`` are set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit mode from ``--color`` (or None).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Diagnostics are driven by the environment, not by -v/-q
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Keep annotated JSON5 companions (package.json5) in sync with canonical JSON.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the json5sync CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'json5sync sync [PATHS...]' to preview companion updates.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(sync_command)

cli.add_command(dump_config_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
