# topmark:header:start
#
#   project      : json5sync
#   file         : errors.py
#   file_relpath : src/json5sync/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the json5sync CLI.

Raise these from commands to abort with a standardized message and exit code.
They are displayed through the project console when one is present on the Click
context, and fall back to Click's default error display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from json5sync.core.exit_codes import ExitCode


class Json5SyncCliError(click.ClickException):
    """Base class for all json5sync CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain message text (color is applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class Json5SyncUsageError(Json5SyncCliError):
    """Invalid command-line invocation (conflicting flags or arguments)."""

    exit_code = ExitCode.USAGE_ERROR


class Json5SyncConfigError(Json5SyncCliError):
    """Missing, unreadable or malformed configuration."""

    exit_code = ExitCode.CONFIG_ERROR


class Json5SyncDataError(Json5SyncCliError):
    """Undecodable or invalid document content."""

    exit_code = ExitCode.DATA_ERROR


class Json5SyncFileNotFoundError(Json5SyncCliError):
    """An input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class Json5SyncPermissionDeniedError(Json5SyncCliError):
    """Insufficient permissions to read or write a file."""

    exit_code = ExitCode.PERMISSION_DENIED


class Json5SyncIOError(Json5SyncCliError):
    """Other I/O failure while reading or writing files."""

    exit_code = ExitCode.IO_ERROR


class Json5SyncUnexpectedError(Json5SyncCliError):
    """Last-resort error for unhandled failures."""

    exit_code = ExitCode.UNEXPECTED_ERROR


_ERRORS_BY_CODE: dict[ExitCode, type[Json5SyncCliError]] = {
    ExitCode.USAGE_ERROR: Json5SyncUsageError,
    ExitCode.CONFIG_ERROR: Json5SyncConfigError,
    ExitCode.DATA_ERROR: Json5SyncDataError,
    ExitCode.FILE_NOT_FOUND: Json5SyncFileNotFoundError,
    ExitCode.PERMISSION_DENIED: Json5SyncPermissionDeniedError,
    ExitCode.IO_ERROR: Json5SyncIOError,
    ExitCode.UNEXPECTED_ERROR: Json5SyncUnexpectedError,
}


def error_for_exit_code(code: ExitCode, message: str) -> Json5SyncCliError:
    """Return the CLI error matching ``code`` (the generic base class if none does)."""
    return _ERRORS_BY_CODE.get(code, Json5SyncCliError)(message)
