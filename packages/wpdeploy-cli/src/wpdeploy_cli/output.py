"""Rich console output utilities for wpdeploy-cli.

Colored success/error/warning/info lines in the style of the azd
deployment hooks, respecting the NO_COLOR environment variable and the
--no-color flag.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console

# Rich respects NO_COLOR itself; --no-color is handled by set_no_color
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("All parameter validations passed")
        ✓ All parameter validations passed
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("environmentName must be between 1 and 9 characters (got 14)")
        ✗ environmentName must be between 1 and 9 characters (got 14)
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module-level console to enable/disable colors.

    Args:
        no_color: If True, disable colored output.
    """
    global console
    console = create_console(no_color=no_color)
