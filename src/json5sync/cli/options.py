# topmark:header:start
#
#   project      : json5sync
#   file         : options.py
#   file_relpath : src/json5sync/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, configuration,
placeholder policy) and their resolution logic, so the group and its commands
can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Any, Callable, ParamSpec, TypeVar

import click

from json5sync.cli.errors import Json5SyncUsageError

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by the group and its commands.
CONTEXT_SETTINGS: dict[str, Any] = {
    "help_option_names": ["-h", "--help"],
}


class ColorMode(str, Enum):
    """User intent for colorized terminal output (``--color``)."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(*, cli_mode: ColorMode | None, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
      1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
      2. **Environment**: ``FORCE_COLOR`` (set and not ``"0"``) → True;
         ``NO_COLOR`` (set to any value) → False.
      3. **Auto**: whether stdout is a TTY.

    Args:
        cli_mode (ColorMode | None): Parsed ``--color`` value; None means "not provided".
        stdout_isatty (bool | None): Override for TTY detection (tests).

    Returns:
        bool: True if ANSI color should be enabled.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False

    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except Exception:
            stdout_isatty = False
    return bool(stdout_isatty)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from ``-v``/``-q`` counts.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, otherwise the number of ``-v`` flags.

    Raises:
        Json5SyncUsageError: If both ``--verbose`` and ``--quiet`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise Json5SyncUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def resolve_empty_comment_flag(
    *, no_empty_comment: bool, empty_comment: bool | None
) -> bool | None:
    """Combine the placeholder flags into a single override.

    ``--no-empty-comment``/``--no-empty-comments`` disable placeholders;
    otherwise ``--empty-comment=<bool>`` decides. None means neither was given.

    Raises:
        Json5SyncUsageError: If ``--no-empty-comment`` is combined with ``--empty-comment=true``.
    """
    if no_empty_comment:
        if empty_comment:
            raise Json5SyncUsageError(
                "'--no-empty-comment' conflicts with '--empty-comment=true'."
            )
        return False
    return empty_comment


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase program output detail. Specify twice for more.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color [auto|always|never]`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore the project config file (json5sync.toml / [tool.json5sync]).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def empty_comment_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the placeholder policy flags.

    ``--empty-comment=<bool>`` accepts ``true/false``, ``1/0``, ``yes/no``;
    ``--no-empty-comment`` (alias ``--no-empty-comments``) disables placeholders.
    """
    f = click.option(
        "--empty-comment",
        "empty_comment",
        type=click.BOOL,
        default=None,
        metavar="BOOL",
        help="Insert a '//' placeholder above uncommented entries (default: true).",
    )(f)
    f = click.option(
        "--no-empty-comment",
        "--no-empty-comments",
        "no_empty_comment",
        is_flag=True,
        help="Do not insert '//' placeholders (same as --empty-comment=false).",
    )(f)
    return f
