# topmark:header:start
#
#   project      : json5sync
#   file         : runner.py
#   file_relpath : src/json5sync/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Synchronize canonical/companion pairs: read, regenerate, compare, write.

This is the orchestration layer around the pure core. For each
[`SyncPair`][json5sync.file_resolver.SyncPair] it:

1. reads the annotated companion (a missing companion is skipped, or created
   from scratch when ``create_missing`` is set);
2. reads and parses the canonical JSON document;
3. regenerates the companion with [`sync_json5`][json5sync.core.regenerator.sync_json5];
4. compares and builds a unified diff;
5. writes the result when applying, preserving the companion's newline style
   and its final-newline presence.

Failures are captured on the returned `SyncResult` (with an exit code) instead of
being raised, so one broken pair never prevents the others from being processed.
Pairs share no state and could be processed in parallel.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from json5sync.config.logging import get_logger
from json5sync.core.errors import UnsupportedValueError
from json5sync.core.exit_codes import ExitCode
from json5sync.core.regenerator import sync_json5
from json5sync.utils.diff import unified_diff_lines
from json5sync.utils.file import detect_newline, ends_with_newline

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from json5sync.config import Config
    from json5sync.config.logging import Json5SyncLogger
    from json5sync.core.types import SyncOptions
    from json5sync.file_resolver import SyncPair

logger: Json5SyncLogger = get_logger(__name__)


class SyncStatus(str, Enum):
    """Outcome of synchronizing one pair.

    Members:
        UNCHANGED: The companion already matches the canonical document.
        CHANGED: The companion differs (written when applying).
        CREATED: The companion did not exist and is (or would be) created.
        SKIPPED: No companion exists and creation is disabled.
        FAILED: The pair could not be processed; see `SyncResult.error`.
    """

    UNCHANGED = "unchanged"
    CHANGED = "changed"
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SyncResult:
    """Result of synchronizing one pair.

    Attributes:
        pair (SyncPair): The processed pair.
        status (SyncStatus): Outcome classification.
        original (str | None): Companion text before the run (None if absent).
        updated (str | None): Companion text produced by the run.
        diff (list[str]): Unified diff lines between ``original`` and ``updated``.
        written (bool): Whether ``updated`` was written to disk.
        error (ExitCode | None): Exit code describing the failure, if any.
        message (str | None): Human-readable detail for skips and failures.
    """

    pair: SyncPair
    status: SyncStatus
    original: str | None = None
    updated: str | None = None
    diff: list[str] = field(default_factory=list)
    written: bool = False
    error: ExitCode | None = None
    message: str | None = None

    @property
    def would_change(self) -> bool:
        """True when the companion is (or would be) rewritten or created."""
        return self.status in (SyncStatus.CHANGED, SyncStatus.CREATED)


def _exit_code_for_os_error(exc: OSError) -> ExitCode:
    if isinstance(exc, FileNotFoundError):
        return ExitCode.FILE_NOT_FOUND
    if isinstance(exc, PermissionError):
        return ExitCode.PERMISSION_DENIED
    return ExitCode.IO_ERROR


def _failed(pair: SyncPair, code: ExitCode, message: str) -> SyncResult:
    logger.error("%s: %s", pair.canonical, message)
    return SyncResult(pair=pair, status=SyncStatus.FAILED, error=code, message=message)


def _read_text(path: Path) -> str:
    # newline="" keeps CR/CRLF so the original newline style can be restored
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _materialize(generated: str, original: str | None) -> str:
    """Return ``generated`` with the original newline style and final-newline policy."""
    if original is None:
        return generated + "\n"
    newline: str = detect_newline(original)
    text: str = generated.replace("\n", newline) if newline != "\n" else generated
    if ends_with_newline(original):
        text += newline
    return text


def sync_pair(pair: SyncPair, config: Config, *, apply: bool = False) -> SyncResult:
    """Synchronize one canonical/companion pair.

    Args:
        pair (SyncPair): Canonical document and its companion.
        config (Config): Resolved configuration (placeholder policy, create_missing).
        apply (bool): Write the result to the companion when it differs.

    Returns:
        SyncResult: The outcome; failures are reported via `SyncResult.error`.
    """
    options: SyncOptions = config.sync_options()

    original: str | None
    try:
        original = _read_text(pair.companion)
    except FileNotFoundError:
        if not config.create_missing:
            logger.info("Skipping %s: no %s found", pair.canonical, pair.companion.name)
            return SyncResult(
                pair=pair,
                status=SyncStatus.SKIPPED,
                message=f"no {pair.companion.name} found",
            )
        original = None
    except UnicodeDecodeError as e:
        return _failed(pair, ExitCode.DATA_ERROR, f"cannot decode {pair.companion}: {e.reason}")
    except OSError as e:
        return _failed(pair, _exit_code_for_os_error(e), f"cannot read {pair.companion}: {e}")

    try:
        source: Any = json.loads(_read_text(pair.canonical))
    except UnicodeDecodeError as e:
        return _failed(pair, ExitCode.DATA_ERROR, f"cannot decode {pair.canonical}: {e.reason}")
    except json.JSONDecodeError as e:
        return _failed(pair, ExitCode.DATA_ERROR, f"invalid JSON in {pair.canonical}: {e}")
    except OSError as e:
        return _failed(pair, _exit_code_for_os_error(e), f"cannot read {pair.canonical}: {e}")

    try:
        generated: str = sync_json5(original, source, options)
    except UnsupportedValueError as e:
        return _failed(pair, ExitCode.DATA_ERROR, f"unsupported canonical data: {e}")

    updated: str = _materialize(generated, original)
    if original == updated:
        logger.debug("%s is up to date", pair.companion)
        return SyncResult(pair=pair, status=SyncStatus.UNCHANGED, original=original, updated=updated)

    status: SyncStatus = SyncStatus.CREATED if original is None else SyncStatus.CHANGED
    result = SyncResult(
        pair=pair,
        status=status,
        original=original,
        updated=updated,
        diff=unified_diff_lines(original or "", updated, label=str(pair.companion)),
    )

    if apply:
        try:
            with open(pair.companion, "w", encoding="utf-8", newline="") as f:
                f.write(updated)
        except OSError as e:
            result.status = SyncStatus.FAILED
            result.error = _exit_code_for_os_error(e)
            result.message = f"cannot write {pair.companion}: {e}"
            logger.error("%s", result.message)
            return result
        result.written = True
        logger.info("Synced %s -> %s", pair.canonical, pair.companion.name)
    return result


def sync_pairs(
    pairs: Iterable[SyncPair], config: Config, *, apply: bool = False
) -> tuple[list[SyncResult], ExitCode | None]:
    """Synchronize several pairs independently.

    Returns:
        tuple[list[SyncResult], ExitCode | None]: The per-pair results, in input
            order, and the first error code encountered (None if all succeeded).
    """
    results: list[SyncResult] = []
    first_error: ExitCode | None = None
    for pair in pairs:
        result: SyncResult = sync_pair(pair, config, apply=apply)
        if result.error is not None and first_error is None:
            first_error = result.error
        results.append(result)
    return results, first_error
