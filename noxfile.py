# topmark:header:start
#
#   project      : json5sync
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync project automation via Nox.

Sessions:
  - `lint`: Ruff lint on the sources and tests.
  - `format_check`: Verify Ruff formatting.
  - `qa`: Per-Python session that runs pytest (fast tests) and pyright.
  - `property_test`: Long-running Hypothesis property tests (opt-in).

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
  - `nox -s property_test`
"""

from __future__ import annotations

import sys

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

# Keep in sync with the classifiers in pyproject.toml
PYTHONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["lint", "format_check", "qa"]
nox.options.reuse_existing_virtualenvs = True


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run the fast test suite and the type checker."""
    session.install("-e", ".[dev]")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    py_ver: str = session.python if isinstance(session.python, str) else CURRENT_PYTHON_VERSION
    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def lint(session: nox.Session) -> None:
    """Lint with Ruff."""
    session.install("-e", ".[dev]")
    session.run("ruff", "check", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Check formatting with Ruff."""
    session.install("-e", ".[dev]")
    session.run("ruff", "format", "--check", ".")


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the slow Hypothesis property tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-vv", "tests", "-m", "hypothesis_slow", *session.posargs)
