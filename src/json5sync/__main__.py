# topmark:header:start
#
#   project      : json5sync
#   file         : __main__.py
#   file_relpath : src/json5sync/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running json5sync via ``python -m json5sync``.

Delegates to :func:`json5sync.cli.main.cli`, the same entry point as the
``json5sync`` console script.

Examples:
    Preview the changes for every ``package.json`` below the current directory::

        python -m json5sync sync --diff
"""

from __future__ import annotations

from json5sync.cli.main import cli

if __name__ == "__main__":
    cli()
