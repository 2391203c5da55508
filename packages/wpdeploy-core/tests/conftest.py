"""Shared pytest fixtures for wpdeploy-core tests."""

from __future__ import annotations

import sys

import pytest
import structlog

from wpdeploy_core.models import DeploymentParameters

VALID_PASSWORD = "P@ssw0rd123!"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def valid_values() -> dict[str, str]:
    """Return a flat env-var mapping for the reference production deployment."""
    return {
        "AZURE_ENV_NAME": "wprod",
        "SITE_NAME": "wpsite",
        "MYSQL_ADMIN_USER": "mysqladmin",
        "MYSQL_ADMIN_PASSWORD": VALID_PASSWORD,
    }


@pytest.fixture
def valid_params(valid_values: dict[str, str]) -> DeploymentParameters:
    """Return DeploymentParameters that pass every rule."""
    return DeploymentParameters.from_mapping(valid_values)
