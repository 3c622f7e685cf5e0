# topmark:header:start
#
#   project      : json5sync
#   file         : file_resolver.py
#   file_relpath : src/json5sync/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Discover canonical documents and pair them with their annotated companions.

The resolver walks the given paths (or the project root), collects files named
like a canonical document (``package.json`` by default), and drops:

- anything below an excluded directory (``node_modules`` by default);
- files matching the configured exclude patterns (gitwildmatch, relative to the
  project root);
- files ignored by the root ``.gitignore`` (unless disabled).

Each remaining file is paired with its companion, the sibling path obtained by
appending the companion suffix (``package.json`` → ``package.json5``). The
result is a sorted list for deterministic output.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

from json5sync.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from json5sync.config import Config
    from json5sync.config.logging import Json5SyncLogger

logger: Json5SyncLogger = get_logger(__name__)

GITIGNORE_NAME: str = ".gitignore"


@dataclass(frozen=True, order=True)
class SyncPair:
    """A canonical document and the annotated companion derived from it.

    Attributes:
        canonical (Path): The comment-free source-of-truth document.
        companion (Path): The annotated document kept in sync (may not exist yet).
    """

    canonical: Path
    companion: Path


def companion_path_for(canonical: Path, suffix: str) -> Path:
    """Return the companion path of ``canonical`` (its path with ``suffix`` appended)."""
    return canonical.with_name(canonical.name + suffix)


def canonical_path_for(companion: Path, suffix: str) -> Path | None:
    """Return the canonical path ``companion`` derives from, or None if the name does not fit."""
    if not suffix or not companion.name.endswith(suffix) or companion.name == suffix:
        return None
    return companion.with_name(companion.name[: -len(suffix)])


def load_gitignore(root: Path) -> GitIgnoreSpec | None:
    """Load the root ``.gitignore`` as a path spec.

    Args:
        root (Path): Project root holding the ``.gitignore``.

    Returns:
        GitIgnoreSpec | None: The compiled rules, or None if there is no readable
            ``.gitignore``.
    """
    path: Path = root / GITIGNORE_NAME
    if not path.is_file():
        return None
    try:
        text: str = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Cannot read ignore rules from '%s': %s", path, e)
        return None
    lines: list[str] = text.splitlines()
    logger.debug("Loaded %d ignore line(s) from %s", len(lines), path)
    return GitIgnoreSpec.from_lines(lines)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for spec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def _walk_canonical_files(
    base: Path, names: frozenset[str], exclude_dirs: frozenset[str]
) -> Iterator[Path]:
    """Yield files below ``base`` named like a canonical document, pruning excluded dirs."""
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirs)
        for filename in sorted(filenames):
            if filename in names:
                yield Path(dirpath) / filename


def _explicit_canonical(path: Path, config: Config) -> Path:
    """Return the canonical document an explicit file stands for.

    A canonical name is taken as-is; a name ending with the companion suffix
    selects its canonical sibling; any other file is treated as canonical.
    """
    if path.name in config.canonical_names:
        return path
    canonical: Path | None = canonical_path_for(path, config.companion_suffix)
    return canonical if canonical is not None else path


def explicit_path_problem(path: Path, config: Config) -> str | None:
    """Return why an explicit input cannot yield a pair, or None when it can.

    Args:
        path (Path): A file or directory given on the command line.
        config (Config): Discovery settings (names, suffix).

    Returns:
        str | None: A message for a missing path or for a companion without
            its canonical document.
    """
    if path.is_dir():
        return None
    if not path.is_file():
        return f"No such file or directory: {path}"
    canonical: Path = _explicit_canonical(path, config)
    if not canonical.is_file():
        return f"No canonical document {canonical.name} for companion {path}"
    return None


def _candidates(paths: Iterable[Path], config: Config) -> set[Path]:
    names: frozenset[str] = frozenset(config.canonical_names)
    exclude_dirs: frozenset[str] = frozenset(config.exclude_dirs)
    found: set[Path] = set()
    for raw in paths:
        problem: str | None = explicit_path_problem(raw, config)
        if problem is not None:
            logger.warning("%s", problem)
            continue
        p: Path = raw.resolve()
        if p.is_dir():
            found.update(_walk_canonical_files(p, names, exclude_dirs))
        else:
            found.add(_explicit_canonical(p, config))
    return found


def discover_pairs(root: Path, config: Config, paths: Sequence[Path] = ()) -> list[SyncPair]:
    """Return the canonical/companion pairs to synchronize.

    Args:
        root (Path): Project root; anchors exclude patterns and the ``.gitignore``.
        config (Config): Discovery settings (names, suffix, exclusions).
        paths (Sequence[Path]): Files or directories to search; defaults to ``root``.

    Returns:
        list[SyncPair]: Sorted, de-duplicated pairs. Companions may not exist; the
            runner decides what to do with those.
    """
    root = root.resolve()
    candidates: set[Path] = _candidates(paths or [root], config)
    logger.debug("Canonical candidates: %d", len(candidates))

    if config.exclude_patterns:
        exclude_spec = GitIgnoreSpec.from_lines(list(config.exclude_patterns))
        candidates = {
            p for p in candidates if not exclude_spec.match_file(_rel_for_match(p, root))
        }

    if config.respect_gitignore:
        ignore_spec: GitIgnoreSpec | None = load_gitignore(root)
        if ignore_spec is not None:
            kept: set[Path] = set()
            for p in candidates:
                if ignore_spec.match_file(_rel_for_match(p, root)):
                    logger.info("Skipping %s (ignored by %s)", p, GITIGNORE_NAME)
                else:
                    kept.add(p)
            candidates = kept

    pairs: list[SyncPair] = sorted(
        SyncPair(canonical=p, companion=companion_path_for(p, config.companion_suffix))
        for p in candidates
    )
    logger.trace("Pairs to process: %d -- %s", len(pairs), pairs)
    return pairs
