# topmark:header:start
#
#   project      : json5sync
#   file         : test_sync_command.py
#   file_relpath : tests/cli/test_sync_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the ``sync`` command: dry-run/apply exit codes, flags and output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from json5sync.config.keys import Env
from json5sync.core.exit_codes import ExitCode
from tests.cli.conftest import (
    assert_FILE_NOT_FOUND,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    assert_WOULD_CHANGE,
    run_cli_in,
)
from tests.conftest import mark_cli, read_text, write_text

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

CANONICAL = '{"name": "demo", "version": "1.1.0", "files": ["dist"]}\n'

ANNOTATED = (
    "{\n"
    "  // npm package name\n"
    '  "name": "demo",\n'
    '  "version": "1.0.0", // release\n'
    "}\n"
)

SYNCED = (
    "{\n"
    "  // npm package name\n"
    '  "name": "demo",\n'
    '  "version": "1.1.0", // release\n'
    "  //\n"
    '  "files": [\n'
    "    //\n"
    '    "dist",\n'
    "  ],\n"
    "}\n"
)


def _project(root: Path, *, companion: str | None = ANNOTATED) -> Path:
    write_text(root / "package.json", CANONICAL)
    if companion is not None:
        write_text(root / "package.json5", companion)
    return root / "package.json5"


@mark_cli
def test_no_canonical_files(tmp_path: Path) -> None:
    """An empty project is not an error."""
    result: Result = run_cli_in(tmp_path, ["sync"])
    assert_SUCCESS(result)
    assert "No canonical files (package.json) to process." in result.output


@mark_cli
def test_dry_run_reports_pending_changes(tmp_path: Path) -> None:
    """Without --apply, nothing is written and the exit code is WOULD_CHANGE."""
    companion = _project(tmp_path)
    result: Result = run_cli_in(tmp_path, ["sync"])
    assert_WOULD_CHANGE(result)
    assert "would update" in result.output
    assert "package.json5" in result.output
    assert read_text(companion) == ANNOTATED


@mark_cli
def test_apply_writes_then_up_to_date(tmp_path: Path) -> None:
    """--apply writes the companion; the next dry run has nothing to do."""
    companion = _project(tmp_path)
    result: Result = run_cli_in(tmp_path, ["sync", "--apply"])
    assert_SUCCESS(result)
    assert "updated" in result.output
    assert read_text(companion) == SYNCED

    again: Result = run_cli_in(tmp_path, ["sync"])
    assert_SUCCESS(again)
    assert "would update" not in again.output


@mark_cli
def test_diff_output(tmp_path: Path) -> None:
    """--diff prints a unified diff of the pending change."""
    _project(tmp_path)
    result: Result = run_cli_in(tmp_path, ["--no-color", "sync", "--diff"])
    assert_WOULD_CHANGE(result)
    assert '-  "version": "1.0.0", // release' in result.output
    assert '+  "version": "1.1.0", // release' in result.output
    assert "\x1b[" not in result.output


@mark_cli
def test_summary(tmp_path: Path) -> None:
    """--summary prints per-status counts."""
    _project(tmp_path)
    write_text(tmp_path / "packages" / "a" / "package.json", "{}\n")
    result: Result = run_cli_in(tmp_path, ["sync", "--summary"])
    assert_WOULD_CHANGE(result)
    assert "Summary:" in result.output
    assert "would update: 1" in result.output
    assert "skipped: 1" in result.output
    assert "total: 2" in result.output


@mark_cli
def test_missing_companion_is_skipped_quietly(tmp_path: Path) -> None:
    """Skipped pairs are only listed in verbose mode."""
    _project(tmp_path, companion=None)
    result: Result = run_cli_in(tmp_path, ["sync"])
    assert_SUCCESS(result)
    assert "skipped" not in result.output

    verbose: Result = run_cli_in(tmp_path, ["-v", "sync"])
    assert_SUCCESS(verbose)
    assert "skipped" in verbose.output


@mark_cli
def test_create_missing(tmp_path: Path) -> None:
    """--create-missing writes a fresh companion."""
    _project(tmp_path, companion=None)
    dry: Result = run_cli_in(tmp_path, ["sync", "--create-missing"])
    assert_WOULD_CHANGE(dry)
    assert "would create" in dry.output
    assert not (tmp_path / "package.json5").exists()

    result: Result = run_cli_in(tmp_path, ["sync", "--create-missing", "--apply"])
    assert_SUCCESS(result)
    assert read_text(tmp_path / "package.json5").startswith('{\n  //\n  "name": "demo",\n')


@mark_cli
def test_placeholder_flags(tmp_path: Path) -> None:
    """All spellings of the placeholder switch disable the ``//`` lines."""
    expected = '{\n  "name": "demo",\n  "version": "1.1.0",\n  "files": [\n    "dist",\n  ],\n}\n'
    for flags in (["--no-empty-comment"], ["--no-empty-comments"], ["--empty-comment=false"]):
        _project(tmp_path, companion=None)
        (tmp_path / "package.json5").unlink(missing_ok=True)
        result: Result = run_cli_in(tmp_path, ["sync", "--create-missing", "--apply", *flags])
        assert_SUCCESS(result)
        assert read_text(tmp_path / "package.json5") == expected, flags


@mark_cli
def test_env_toggle_and_cli_precedence(tmp_path: Path) -> None:
    """The environment disables placeholders unless the CLI re-enables them."""
    _project(tmp_path, companion=None)
    env = {Env.ADD_EMPTY_COMMENT: "false"}

    result: Result = run_cli_in(tmp_path, ["sync", "--create-missing", "--apply"], env=env)
    assert_SUCCESS(result)
    assert "//" not in read_text(tmp_path / "package.json5")

    (tmp_path / "package.json5").unlink()
    result = run_cli_in(
        tmp_path, ["sync", "--create-missing", "--apply", "--empty-comment", "true"], env=env
    )
    assert_SUCCESS(result)
    assert "  //\n" in read_text(tmp_path / "package.json5")


@mark_cli
def test_conflicting_placeholder_flags(tmp_path: Path) -> None:
    """--no-empty-comment and --empty-comment=true contradict each other."""
    _project(tmp_path)
    result: Result = run_cli_in(tmp_path, ["sync", "--no-empty-comment", "--empty-comment=true"])
    assert_USAGE_ERROR(result)


@mark_cli
def test_invalid_canonical_is_data_error(tmp_path: Path) -> None:
    """Broken canonical JSON fails with DATA_ERROR and leaves the companion alone."""
    write_text(tmp_path / "package.json", "{ broken")
    write_text(tmp_path / "package.json5", ANNOTATED)
    result: Result = run_cli_in(tmp_path, ["sync", "--apply"])
    assert result.exit_code == ExitCode.DATA_ERROR, result.output
    assert "failed" in result.output
    assert "could not be synced" in result.output
    assert read_text(tmp_path / "package.json5") == ANNOTATED


@mark_cli
def test_explicit_paths_and_exclude(tmp_path: Path) -> None:
    """Only the given paths are processed; --exclude removes matches."""
    _project(tmp_path / "a")
    _project(tmp_path / "b")

    only_a: Result = run_cli_in(tmp_path, ["sync", "--apply", "a"])
    assert_SUCCESS(only_a)
    assert read_text(tmp_path / "a" / "package.json5") == SYNCED
    assert read_text(tmp_path / "b" / "package.json5") == ANNOTATED

    excluded: Result = run_cli_in(tmp_path, ["sync", "--apply", "--exclude", "b/"])
    assert_SUCCESS(excluded)
    assert read_text(tmp_path / "b" / "package.json5") == ANNOTATED


@mark_cli
def test_gitignore_and_no_gitignore(tmp_path: Path) -> None:
    """Ignored projects are skipped unless --no-gitignore is given."""
    _project(tmp_path / "build")
    write_text(tmp_path / ".gitignore", "build/\n")

    result: Result = run_cli_in(tmp_path, ["sync"])
    assert_SUCCESS(result)

    result = run_cli_in(tmp_path, ["sync", "--no-gitignore"])
    assert_WOULD_CHANGE(result)


@mark_cli
def test_custom_suffix(tmp_path: Path) -> None:
    """--suffix selects a differently named companion."""
    write_text(tmp_path / "package.json", CANONICAL)
    write_text(tmp_path / "package.jsonc", ANNOTATED)
    result: Result = run_cli_in(tmp_path, ["sync", "--suffix", "c", "--apply"])
    assert_SUCCESS(result)
    assert read_text(tmp_path / "package.jsonc") == SYNCED


@mark_cli
def test_project_config_file_is_used(tmp_path: Path) -> None:
    """json5sync.toml in the working directory configures the run."""
    _project(tmp_path, companion=None)
    write_text(tmp_path / "json5sync.toml", "[sync]\ncreate_missing = true\n")

    result: Result = run_cli_in(tmp_path, ["sync"])
    assert_WOULD_CHANGE(result)
    assert "would create" in result.output

    ignored: Result = run_cli_in(tmp_path, ["sync", "--no-config"])
    assert_SUCCESS(ignored)


@mark_cli
def test_invalid_config_is_config_error(tmp_path: Path) -> None:
    """An explicit, malformed config file aborts with CONFIG_ERROR."""
    _project(tmp_path)
    write_text(tmp_path / "bad.toml", "[sync\n")
    result: Result = run_cli_in(tmp_path, ["sync", "--config", "bad.toml"])
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
    assert "bad.toml" in result.output


@mark_cli
def test_quiet_suppresses_status_lines(tmp_path: Path) -> None:
    """-q keeps the exit code but prints nothing for pending changes."""
    _project(tmp_path)
    result: Result = run_cli_in(tmp_path, ["-q", "sync"])
    assert_WOULD_CHANGE(result)
    assert "would update" not in result.output


@mark_cli
def test_missing_path_is_file_not_found(tmp_path: Path) -> None:
    """A nonexistent PATH is reported and the run exits with FILE_NOT_FOUND."""
    result: Result = run_cli_in(tmp_path, ["sync", "nope"])
    assert_FILE_NOT_FOUND(result)
    assert "No such file or directory: nope" in result.output


@mark_cli
def test_missing_path_does_not_hide_other_paths(tmp_path: Path) -> None:
    """Valid paths are still synced when another PATH is missing."""
    _project(tmp_path / "a")
    result: Result = run_cli_in(tmp_path, ["sync", "--apply", "a", "nope"])
    assert_FILE_NOT_FOUND(result)
    assert read_text(tmp_path / "a" / "package.json5") == SYNCED


@mark_cli
def test_companion_without_canonical_is_reported(tmp_path: Path) -> None:
    """An explicit companion whose canonical sibling is missing never becomes canonical."""
    write_text(tmp_path / "package.json5", "{\n}\n")
    result: Result = run_cli_in(tmp_path, ["sync", "--apply", "--create-missing", "package.json5"])
    assert_FILE_NOT_FOUND(result)
    assert "No canonical document package.json" in result.output
    assert not (tmp_path / "package.json55").exists()
