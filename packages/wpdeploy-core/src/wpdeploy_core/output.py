"""Validation result output formatters.

Rich table and JSON output for validation results and name projections.
Neither format ever contains the database password.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wpdeploy_core.models import ValidationResult, Violation
from wpdeploy_core.naming import ResourceProjection


def _fit_icon(fits: bool) -> str:
    return "✅" if fits else "❌"


def format_projection_table(
    projections: Sequence[ResourceProjection],
    console: Console | None = None,
) -> None:
    """Print projected resource name lengths as a Rich table.

    Args:
        projections: Projections to display
        console: Optional Rich console (creates one if not provided)
    """
    if console is None:
        console = Console()

    table = Table(show_header=True, header_style="bold", title="Projected resource names")
    table.add_column("", width=3, justify="center")
    table.add_column("Resource", min_width=20)
    table.add_column("Name", min_width=30)
    table.add_column("Length", justify="right")
    table.add_column("Max", justify="right")

    for projection in projections:
        color = "green" if projection.fits else "red"
        table.add_row(
            _fit_icon(projection.fits),
            Text(projection.resource, style=color),
            Text(projection.preview),
            Text(str(projection.projected_length), style=color),
            str(projection.max_length),
        )

    console.print(table)


def format_result_table(result: ValidationResult, console: Console | None = None) -> None:
    """Print a validation result as a Rich panel, projection table and violation list.

    Args:
        result: ValidationResult to display
        console: Optional Rich console (creates one if not provided)
    """
    if console is None:
        console = Console()

    params = result.parameters
    color = "green" if result.passed else "red"
    header = Text()
    header.append("WORDPRESS DEPLOYMENT PARAMETER VALIDATION\n\n", style="bold")
    header.append(f"Status: {_fit_icon(result.passed)} ", style=color)
    header.append("PASSED" if result.passed else "FAILED", style=f"bold {color}")
    header.append(f"\nViolations: {len(result.violations)}")
    if result.fail_fast and result.failed:
        header.append(" (stopped at first failure)", style="dim")
    header.append(
        f"\nEnvironment: {params.environment_name or '-'} "
        f"(length: {len(params.environment_name)})"
    )
    header.append(f"\nSite: {params.site_name} (length: {len(params.site_name)})")
    header.append(
        f"\nAdmin user: {params.database_admin_user} "
        f"(length: {len(params.database_admin_user)})"
    )
    console.print(Panel(header, title="[bold]Validation Results[/bold]"))

    if result.projections:
        format_projection_table(result.projections, console)

    if result.violations:
        console.print()
        console.print("[bold red]Violations:[/bold red]")
        for violation in result.violations:
            field = escape(violation.field)
            console.print(f"  [red]• {field}[/red]: {escape(violation.message)}")


def _violation_to_dict(violation: Violation) -> dict[str, Any]:
    return violation.model_dump(mode="json", exclude_none=True)


def _projection_to_dict(projection: ResourceProjection) -> dict[str, Any]:
    return {
        "key": projection.key,
        "resource": projection.resource,
        "template": projection.template,
        "preview": projection.preview,
        "projected_length": projection.projected_length,
        "max_length": projection.max_length,
        "fits": projection.fits,
    }


def result_to_dict(result: ValidationResult) -> dict[str, Any]:
    """Convert a ValidationResult to a JSON-serialisable dictionary."""
    return {
        "status": "passed" if result.passed else "failed",
        "passed": result.passed,
        "fail_fast": result.fail_fast,
        "parameters": result.parameters.to_safe_dict(),
        "violations": [_violation_to_dict(v) for v in result.violations],
        "projections": [_projection_to_dict(p) for p in result.projections],
    }


def format_result_json(result: ValidationResult, pretty: bool = True) -> str:
    """Format a validation result as JSON.

    Args:
        result: ValidationResult to format
        pretty: Whether to use indentation

    Returns:
        JSON string representation
    """
    data = result_to_dict(result)
    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)


def format_projections_json(projections: Sequence[ResourceProjection], pretty: bool = True) -> str:
    """Format projections as a JSON document with an overall `fits` flag."""
    data = {
        "fits": all(p.fits for p in projections),
        "projections": [_projection_to_dict(p) for p in projections],
    }
    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)


def _write_raw(console: Console, text: str) -> None:
    # Raw write keeps JSON parseable (no Rich wrapping or markup)
    console.file.write(text + "\n")


def print_result(
    result: ValidationResult,
    output_format: str = "table",
    console: Console | None = None,
) -> None:
    """Print a validation result in the specified format.

    Args:
        result: ValidationResult to display
        output_format: Output format ("table" or "json")
        console: Optional Rich console
    """
    if console is None:
        console = Console()

    if output_format == "json":
        _write_raw(console, format_result_json(result, pretty=True))
    else:
        format_result_table(result, console)


def print_projections(
    projections: Sequence[ResourceProjection],
    output_format: str = "table",
    console: Console | None = None,
) -> None:
    """Print name projections in the specified format."""
    if console is None:
        console = Console()

    if output_format == "json":
        _write_raw(console, format_projections_json(projections, pretty=True))
    else:
        format_projection_table(projections, console)
