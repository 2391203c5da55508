"""Azure subscription match check.

Before touching the deployed resources, the CLI's active subscription must be
the one azd targeted. Obtaining the two IDs is the caller's job; this module
only compares them.
"""

from __future__ import annotations

import structlog

from wpdeploy_core.models import CheckResult, CheckStatus

logger = structlog.get_logger(__name__)

SUBSCRIPTION_CHECK_NAME = "subscription"


def check_subscription(current: str, target: str) -> CheckResult:
    """Compare the active Azure subscription with the azd target subscription.

    Args:
        current: Subscription ID reported by `az account show`
        target: AZURE_SUBSCRIPTION_ID from the azd environment (may be empty)

    Returns:
        CheckResult: PASSED on a match, WARNING when no target is set,
        FAILED on a mismatch or when no current subscription is known.

    Example:
        >>> check_subscription("1111", "2222").remedy
        'az account set --subscription 2222'
    """
    current = current.strip()
    target = target.strip()
    details = {"current": current, "target": target}

    if not current:
        result = CheckResult(
            name=SUBSCRIPTION_CHECK_NAME,
            status=CheckStatus.FAILED,
            message="Could not retrieve current Azure subscription",
            remedy="az login",
            details=details,
        )
    elif not target:
        result = CheckResult(
            name=SUBSCRIPTION_CHECK_NAME,
            status=CheckStatus.WARNING,
            message="No AZURE_SUBSCRIPTION_ID set in azd environment, using current subscription",
            details=details,
        )
    elif current.lower() != target.lower():
        result = CheckResult(
            name=SUBSCRIPTION_CHECK_NAME,
            status=CheckStatus.FAILED,
            message=(
                f"Azure subscription mismatch: current subscription is {current}, "
                f"azd target subscription is {target}"
            ),
            remedy=f"az account set --subscription {target}",
            details=details,
        )
    else:
        result = CheckResult(
            name=SUBSCRIPTION_CHECK_NAME,
            status=CheckStatus.PASSED,
            message="Azure subscription matches azd target subscription",
            details=details,
        )

    logger.info("subscription_checked", status=result.status.value)
    return result
