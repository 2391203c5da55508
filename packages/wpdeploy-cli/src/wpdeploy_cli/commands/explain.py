"""wpdeploy explain command - Show projected resource name lengths."""

from __future__ import annotations

import os

import click

from wpdeploy_cli import output as cli_output
from wpdeploy_cli.output import error, info, success


@click.command()
@click.option("--env-name", default=None, help="Environment name (overrides AZURE_ENV_NAME)")
@click.option("--site-name", default=None, help="Site name (overrides SITE_NAME) [default: wpsite]")
@click.option(
    "--env/--no-env",
    "use_environment",
    default=True,
    help="Read AZURE_ENV_NAME and SITE_NAME from the environment [default: on]",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "text", "json"]),
    default="table",
    help="Output format; text prints one plain line per resource [default: table]",
)
def explain(
    env_name: str | None,
    site_name: str | None,
    use_environment: bool,
    output_format: str,
) -> None:
    """Show the projected length of every generated resource name.

    No credentials are needed. Each resource name is built from a fixed
    template, with 13 characters reserved for the uniqueString() suffix, and
    compared with its Azure length limit.

    Examples:

        wpdeploy explain --env-name wprod

        wpdeploy explain --env-name wprod --site-name myblog --format json

        wpdeploy explain --env-name wprod --format text
    """
    from wpdeploy_core.models import PARAMETER_KEYS, DeploymentParameters
    from wpdeploy_core.naming import (
        explain_projections,
        max_environment_name_length,
        project_resource_names,
    )
    from wpdeploy_core.output import print_projections

    values: dict[str, str] = {}
    if use_environment:
        for field_name in ("environment_name", "site_name"):
            env_key = PARAMETER_KEYS[field_name][0]
            if os.environ.get(env_key):
                values[env_key] = os.environ[env_key]
    if env_name is not None:
        values["AZURE_ENV_NAME"] = env_name
    if site_name is not None:
        values["SITE_NAME"] = site_name

    params = DeploymentParameters.from_mapping(values)
    if not params.environment_name:
        error("Environment name is not set. Use --env-name or set AZURE_ENV_NAME.")
        raise SystemExit(1)

    projections = project_resource_names(params.environment_name, params.site_name)
    if output_format == "text":
        for line in explain_projections(projections):
            info(line, markup=False)
    else:
        print_projections(projections, output_format=output_format, console=cli_output.console)

    if output_format != "json":
        info(f"Environment names may be at most {max_environment_name_length()} characters.")

    if all(p.fits for p in projections):
        if output_format != "json":
            success("All resource names fit their limits")
        raise SystemExit(0)

    if output_format != "json":
        too_long = ", ".join(p.resource for p in projections if not p.fits)
        error(f"Resource names too long: {too_long}")
    raise SystemExit(1)
