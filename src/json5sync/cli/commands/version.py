# topmark:header:start
#
#   project      : json5sync
#   file         : version.py
#   file_relpath : src/json5sync/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync `version` command.

Prints the json5sync version installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from json5sync.cli.cmd_common import get_effective_verbosity
from json5sync.cli.options import CONTEXT_SETTINGS
from json5sync.constants import JSON5SYNC_VERSION

if TYPE_CHECKING:
    from json5sync.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the installed version of json5sync.",
    context_settings=CONTEXT_SETTINGS,
)
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Show the installed version of json5sync."""
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("json5sync version:", bold=True, underline=True))
        console.print(f"    {console.styled(JSON5SYNC_VERSION, bold=True)}")
    else:
        console.print(console.styled(JSON5SYNC_VERSION, bold=True))
