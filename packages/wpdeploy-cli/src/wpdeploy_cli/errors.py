"""CLI error handling for wpdeploy-cli.

Wraps wpdeploy-core exceptions into user-friendly messages with exit codes
the deployment hooks can act on.
"""

from __future__ import annotations

import sys
from typing import IO, Any, NoReturn

import click
from rich.markup import escape

from wpdeploy_cli.output import error
from wpdeploy_core.errors import ConfigurationError

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Validation failure, mismatched subscription
EXIT_SYSTEM_ERROR = 2  # Unreadable input file


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(escape(self.format_message()))


def handle_configuration_error(err: ConfigurationError) -> NoReturn:
    """Turn an unreadable parameter source into a CLI error.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(f"Cannot read parameters: {err.user_message}", exit_code=EXIT_SYSTEM_ERROR)


def handle_file_not_found(file_path: str) -> NoReturn:
    """Handle a missing parameter file with a hint.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Create it with `azd env get-values > .env` or pass parameters as options.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def exit_with_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Exit the CLI with an error message.

    Note:
        This function never returns - it always calls sys.exit().
    """
    error(message)
    sys.exit(exit_code)
