"""wpdeploy subscription command - Verify the active Azure subscription.

Mirrors the post-provision hook: the subscription `az` is logged into must be
the one the azd environment targets.
"""

from __future__ import annotations

import os
import subprocess

import click

from wpdeploy_cli.errors import CLIError
from wpdeploy_cli.output import error, info, success, warning

AZ_TIMEOUT_SECONDS = 30


def current_subscription() -> str:
    """Return the subscription ID `az` is logged into.

    Raises:
        CLIError: If the Azure CLI is missing, times out, or is not logged in.
    """
    cmd = ["az", "account", "show", "--query", "id", "-o", "tsv"]
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            timeout=AZ_TIMEOUT_SECONDS,
        )
    except FileNotFoundError:
        raise CLIError(
            "Azure CLI (az) is not installed\n"
            "Please install Azure CLI: https://docs.microsoft.com/cli/azure/install-azure-cli"
        ) from None
    except subprocess.TimeoutExpired:
        raise CLIError(f"`az account show` timed out after {AZ_TIMEOUT_SECONDS}s") from None
    except subprocess.CalledProcessError:
        raise CLIError("Not logged in to Azure\nPlease run: az login") from None

    return completed.stdout.strip()


@click.command()
@click.option(
    "--current",
    default=None,
    help="Active subscription ID (default: ask `az account show`)",
)
@click.option(
    "--target",
    default=None,
    help="azd target subscription ID (default: AZURE_SUBSCRIPTION_ID)",
)
def subscription(current: str | None, target: str | None) -> None:
    """Check that the active Azure subscription matches the azd target.

    Examples:

        wpdeploy subscription

        wpdeploy subscription --target 00000000-0000-0000-0000-000000000000
    """
    from wpdeploy_core.models import CheckStatus
    from wpdeploy_core.subscription import check_subscription

    if current is None:
        current = current_subscription()
    if target is None:
        target = os.environ.get("AZURE_SUBSCRIPTION_ID", "")

    info(f"Current Azure subscription: {current or '-'}", markup=False)
    result = check_subscription(current, target)

    if result.status == CheckStatus.PASSED:
        success(result.message)
    elif result.status == CheckStatus.WARNING:
        warning(result.message)
    else:
        error(result.message)
        if result.remedy:
            error(f"Please run: {result.remedy}")
        raise SystemExit(1)
