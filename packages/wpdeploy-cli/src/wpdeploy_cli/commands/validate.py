"""wpdeploy validate command - Validate deployment parameters.

Replaces the validation block of the pre-provision hook and the interactive
deploy script with one call into wpdeploy-core.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

import click

from wpdeploy_cli import output as cli_output
from wpdeploy_cli.output import error, info, success, warning


@dataclass
class ValidateOptions:
    """Grouped validate CLI options."""

    env_name: str | None
    site_name: str | None
    admin_user: str | None
    allowed_ip: str | None
    resource_group: str | None
    env_file: str | None
    file_path: str | None
    use_environment: bool
    prompt_password: bool
    fail_fast: bool
    output_format: str
    verbose: bool


def _flag_values(opts: ValidateOptions) -> dict[str, str]:
    """Map explicitly given options onto environment variable keys."""
    flags = {
        "AZURE_ENV_NAME": opts.env_name,
        "SITE_NAME": opts.site_name,
        "MYSQL_ADMIN_USER": opts.admin_user,
        "ALLOWED_IP_ADDRESS": opts.allowed_ip,
        "RESOURCE_GROUP_NAME": opts.resource_group,
    }
    return {key: value for key, value in flags.items() if value is not None}


def _collect_values(opts: ValidateOptions) -> dict[str, str]:
    """Merge every parameter source, lowest precedence first.

    Order: process environment, --file YAML, --env-file, explicit options,
    prompted password.

    Raises:
        CLIError: If a source file is missing or unreadable.
    """
    from wpdeploy_cli.errors import handle_configuration_error, handle_file_not_found
    from wpdeploy_core.errors import ConfigurationError
    from wpdeploy_core.sources import (
        load_env_file,
        load_yaml_values,
        merge_sources,
        parse_env_values,
        read_environment,
    )

    sources: list[dict[str, str]] = []
    if opts.use_environment:
        sources.append(read_environment(os.environ))

    try:
        if opts.file_path:
            path = Path(opts.file_path)
            if not path.exists():
                handle_file_not_found(opts.file_path)
            sources.append(load_yaml_values(path))

        if opts.env_file == "-":
            sources.append(parse_env_values(sys.stdin.read()))
        elif opts.env_file:
            path = Path(opts.env_file)
            if not path.exists():
                handle_file_not_found(opts.env_file)
            sources.append(load_env_file(path))
    except ConfigurationError as e:
        handle_configuration_error(e)

    sources.append(_flag_values(opts))

    if opts.prompt_password:
        password = click.prompt(
            "MySQL admin password", hide_input=True, default="", show_default=False
        )
        sources.append({"MYSQL_ADMIN_PASSWORD": password})

    return merge_sources(*sources)


def _run_validation(opts: ValidateOptions) -> None:
    """Validate the collected parameters and display the result.

    Raises:
        SystemExit: With code 0 on success, 1 on violations
    """
    from wpdeploy_core.models import DeploymentParameters
    from wpdeploy_core.output import print_result
    from wpdeploy_core.validator import validate_parameters

    if opts.verbose:
        info("Collecting deployment parameters...")

    values = _collect_values(opts)
    params = DeploymentParameters.from_mapping(values)
    if opts.resource_group == "":
        # An explicit empty option is a supplied value, not a missing one
        params = params.model_copy(update={"resource_group_name": ""})

    if opts.verbose:
        info(f"Environment Name: {params.environment_name}", markup=False)
        info(f"MySQL Admin User: {params.database_admin_user}", markup=False)
        info(f"Site Name: {params.site_name}", markup=False)
        if not params.allowed_ip_address:
            warning("No ALLOWED_IP_ADDRESS set, deployment will not be IP restricted")

    result = validate_parameters(params, fail_fast=opts.fail_fast)
    print_result(result, output_format=opts.output_format, console=cli_output.console)

    if result.passed:
        if opts.output_format == "table":
            success("All parameter validations passed")
        raise SystemExit(0)
    if opts.output_format == "table":
        error(f"Parameter validation failed ({len(result.violations)} violation(s))")
    raise SystemExit(1)


@click.command()
@click.option("--env-name", default=None, help="Environment name (overrides AZURE_ENV_NAME)")
@click.option("--site-name", default=None, help="Site name (overrides SITE_NAME) [default: wpsite]")
@click.option(
    "--admin-user",
    default=None,
    help="MySQL admin user (overrides MYSQL_ADMIN_USER) [default: mysqladmin]",
)
@click.option("--allowed-ip", default=None, help="Allowed client IP (overrides ALLOWED_IP_ADDRESS)")
@click.option(
    "--resource-group",
    default=None,
    help="Resource group name to validate (overrides RESOURCE_GROUP_NAME)",
)
@click.option(
    "--env-file",
    default=None,
    help="File with `azd env get-values` output, or - for stdin",
)
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=None,
    help="YAML file with parameters (environmentName, siteName, ...)",
)
@click.option(
    "--env/--no-env",
    "use_environment",
    default=True,
    help="Read parameters from process environment variables [default: on]",
)
@click.option(
    "--prompt-password",
    is_flag=True,
    default=False,
    help="Prompt for the MySQL admin password (input hidden)",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    default=False,
    help="Stop at the first violation, like the azd shell hooks did",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format [default: table]",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
def validate(
    env_name: str | None,
    site_name: str | None,
    admin_user: str | None,
    allowed_ip: str | None,
    resource_group: str | None,
    env_file: str | None,
    file_path: str | None,
    use_environment: bool,
    prompt_password: bool,
    fail_fast: bool,
    output_format: str,
    verbose: bool,
) -> None:
    """Validate deployment parameters before provisioning.

    Checks the environment name, the projected length of every resource
    name, the MySQL admin user and password complexity, and the resource
    group name. All violations are reported in one pass unless --fail-fast
    is given. The password is read from MYSQL_ADMIN_PASSWORD or prompted
    for; it is never printed.

    Examples:

        wpdeploy validate --env-name wprod

        azd env get-values | wpdeploy validate --env-file -

        wpdeploy validate --file wpdeploy.yaml --format json
    """
    opts = ValidateOptions(
        env_name=env_name,
        site_name=site_name,
        admin_user=admin_user,
        allowed_ip=allowed_ip,
        resource_group=resource_group,
        env_file=env_file,
        file_path=file_path,
        use_environment=use_environment,
        prompt_password=prompt_password,
        fail_fast=fail_fast,
        output_format=output_format,
        verbose=verbose,
    )

    _run_validation(opts)
