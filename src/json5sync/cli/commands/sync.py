# topmark:header:start
#
#   project      : json5sync
#   file         : sync.py
#   file_relpath : src/json5sync/cli/commands/sync.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync `sync` command.

Regenerates each annotated companion (``package.json5``) from its canonical
document (``package.json``), keeping ``//`` comments attached to their keys.

Dry-run by default: nothing is written and the command exits with
``WOULD_CHANGE`` (2) when at least one companion is out of date. Use
``--apply`` to write the updates.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

import click

from json5sync.cli.cmd_common import build_config, get_effective_verbosity
from json5sync.cli.errors import error_for_exit_code
from json5sync.cli.options import (
    CONTEXT_SETTINGS,
    common_config_options,
    empty_comment_options,
    resolve_empty_comment_flag,
)
from json5sync.config.logging import get_logger
from json5sync.core.exit_codes import ExitCode
from json5sync.file_resolver import discover_pairs, explicit_path_problem
from json5sync.runner import SyncStatus, sync_pairs
from json5sync.utils.diff import render_patch
from json5sync.utils.file import compute_relpath

if TYPE_CHECKING:
    from json5sync.cli.console import ConsoleLike
    from json5sync.config import Config
    from json5sync.config.logging import Json5SyncLogger
    from json5sync.file_resolver import SyncPair
    from json5sync.runner import SyncResult

logger: Json5SyncLogger = get_logger(__name__)

# (dry-run label, applied label)
_STATUS_LABELS: dict[SyncStatus, tuple[str, str]] = {
    SyncStatus.UNCHANGED: ("up to date", "up to date"),
    SyncStatus.CHANGED: ("would update", "updated"),
    SyncStatus.CREATED: ("would create", "created"),
    SyncStatus.SKIPPED: ("skipped", "skipped"),
    SyncStatus.FAILED: ("failed", "failed"),
}

_STATUS_COLORS: dict[SyncStatus, str] = {
    SyncStatus.UNCHANGED: "green",
    SyncStatus.CHANGED: "yellow",
    SyncStatus.CREATED: "yellow",
    SyncStatus.SKIPPED: "bright_black",
    SyncStatus.FAILED: "bright_red",
}


def _status_line(console: ConsoleLike, result: SyncResult, *, apply: bool) -> str:
    label: str = _STATUS_LABELS[result.status][1 if apply else 0]
    path: Path = compute_relpath(result.pair.companion, None)
    line = f"{console.styled(f'{label:>12}', fg=_STATUS_COLORS[result.status])}  {path}"
    if result.message and result.status in (SyncStatus.SKIPPED, SyncStatus.FAILED):
        line += f" ({result.message})"
    return line


def _report(
    console: ConsoleLike,
    results: list[SyncResult],
    *,
    apply: bool,
    show_diff: bool,
    verbosity: int,
) -> None:
    for result in results:
        if result.status is SyncStatus.FAILED:
            console.error(_status_line(console, result, apply=apply))
            continue
        if verbosity < 0:
            continue
        if result.would_change or verbosity > 0:
            console.print(_status_line(console, result, apply=apply))
        if show_diff and result.diff:
            console.print(render_patch(result.diff, show_line_numbers=verbosity > 1), nl=False)


def _summary(console: ConsoleLike, results: list[SyncResult], *, apply: bool) -> None:
    counts: Counter[SyncStatus] = Counter(r.status for r in results)
    console.print()
    console.print(console.styled("Summary:", bold=True, underline=True))
    for status in SyncStatus:
        if counts[status]:
            label: str = _STATUS_LABELS[status][1 if apply else 0]
            console.print(f"  {label}: {counts[status]}")
    console.print(f"  total: {len(results)}")


@click.command(
    name="sync",
    help=(
        "Regenerate annotated JSON5 companions from their canonical JSON documents, "
        "preserving '//' comments. Dry-run unless --apply is given."
    ),
    epilog=(
        "Exit status: 0 when everything is up to date (or was written), "
        "2 when a dry run found pending changes, 66 when a PATH could not be resolved, "
        "another non-zero code on other errors."
    ),
    context_settings=CONTEXT_SETTINGS,
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(path_type=Path),
)
@click.option("--apply", "apply_changes", is_flag=True, help="Write the updated companions.")
@click.option("--diff", "show_diff", is_flag=True, help="Show a unified diff per companion.")
@click.option("--summary", "show_summary", is_flag=True, help="Print per-status counts.")
@click.option(
    "--suffix",
    "companion_suffix",
    default=None,
    metavar="TEXT",
    help="Suffix appended to the canonical file name to get the companion (default: '5').",
)
@click.option(
    "--exclude",
    "exclude_patterns",
    multiple=True,
    metavar="PATTERN",
    help="Gitignore-style pattern (relative to the current directory) to exclude. Repeatable.",
)
@click.option(
    "--no-gitignore",
    "no_gitignore",
    is_flag=True,
    help="Do not skip canonical files ignored by the root .gitignore.",
)
@click.option(
    "--create-missing",
    "create_missing",
    is_flag=True,
    help="Create companions that do not exist yet.",
)
@common_config_options
@empty_comment_options
@click.pass_context
def sync_command(
    ctx: click.Context,
    *,
    paths: tuple[Path, ...],
    apply_changes: bool,
    show_diff: bool,
    show_summary: bool,
    companion_suffix: str | None,
    exclude_patterns: tuple[str, ...],
    no_gitignore: bool,
    create_missing: bool,
    no_config: bool,
    config_paths: tuple[str, ...],
    no_empty_comment: bool,
    empty_comment: bool | None,
) -> None:
    """Synchronize companions for PATHS (default: the current directory).

    Raises:
        Json5SyncCliError: A subclass matching the first error encountered.
    """
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = get_effective_verbosity(ctx)

    if companion_suffix is not None and not companion_suffix:
        raise click.BadParameter("must not be empty", param_hint="'--suffix'")

    config: Config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        overrides={
            "add_empty_comment": resolve_empty_comment_flag(
                no_empty_comment=no_empty_comment, empty_comment=empty_comment
            ),
            "companion_suffix": companion_suffix,
            "exclude_patterns": exclude_patterns or None,
            "respect_gitignore": False if no_gitignore else None,
            "create_missing": True if create_missing else None,
        },
    )

    unresolved: list[str] = []
    for path in paths:
        problem: str | None = explicit_path_problem(path, config)
        if problem is not None:
            console.warn(problem)
            unresolved.append(problem)

    pairs: list[SyncPair] = discover_pairs(Path.cwd(), config, paths)
    results: list[SyncResult] = []
    first_error: ExitCode | None = None
    if pairs:
        results, first_error = sync_pairs(pairs, config, apply=apply_changes)
        _report(console, results, apply=apply_changes, show_diff=show_diff, verbosity=verbosity)
        if show_summary:
            _summary(console, results, apply=apply_changes)
    elif verbosity >= 0:
        names: str = ", ".join(config.canonical_names)
        console.print(console.styled(f"No canonical files ({names}) to process.", fg="blue"))

    if first_error is not None:
        failed: int = sum(1 for r in results if r.status is SyncStatus.FAILED)
        raise error_for_exit_code(first_error, f"{failed} companion(s) could not be synced.")
    if unresolved:
        raise error_for_exit_code(
            ExitCode.FILE_NOT_FOUND, f"{len(unresolved)} path(s) could not be resolved."
        )

    if not apply_changes and any(r.would_change for r in results):
        ctx.exit(ExitCode.WOULD_CHANGE)
