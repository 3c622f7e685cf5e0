# topmark:header:start
#
#   project      : json5sync
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the json5sync test suite.

Sets up TRACE-level logging for test runs, isolates tests from the developer's
environment, and provides typed wrappers around pytest marks and fixtures.

Notes:
    Tests should respect the immutable/mutable configuration split: build
    configs with `MutableConfig` and `freeze()` them (see `make_config`); never
    mutate a frozen `Config`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from json5sync.config import MutableConfig, logging
from json5sync.config.keys import Env

if TYPE_CHECKING:
    from pathlib import Path

    from json5sync.config import Config

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type."""

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_core: DecoratorType[Any] = as_typed_mark(pytest.mark.core)
mark_config: DecoratorType[Any] = as_typed_mark(pytest.mark.config)
mark_resolver: DecoratorType[Any] = as_typed_mark(pytest.mark.resolver)
mark_runner: DecoratorType[Any] = as_typed_mark(pytest.mark.runner)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def clean_json5sync_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's shell from steering log level, placeholders or color."""
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)
    monkeypatch.delenv(Env.ADD_EMPTY_COMMENT, raising=False)
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level for all tests so captured output is as detailed as possible."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty project directory.

    Returns:
        Path: The project root, also the current working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a builder holding the defaults plus ``overrides`` (set verbatim)."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and ``overrides``."""
    return make_mutable_config(**overrides).freeze()


def write_text(path: Path, text: str) -> Path:
    """Write ``text`` verbatim (no newline translation) and return ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return path


def read_text(path: Path) -> str:
    """Read ``path`` verbatim (no newline translation)."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()
