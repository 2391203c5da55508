"""Shared test fixtures for wpdeploy-cli tests.

Provides CliRunner fixtures and parameter file helpers for testing CLI
commands.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest
import structlog.testing

VALID_PASSWORD = "P@ssw0rd123!"

PARAMETER_ENV_VARS = (
    "AZURE_ENV_NAME",
    "SITE_NAME",
    "MYSQL_ADMIN_USER",
    "MYSQL_ADMIN_PASSWORD",
    "ALLOWED_IP_ADDRESS",
    "RESOURCE_GROUP_NAME",
    "AZURE_SUBSCRIPTION_ID",
)


@pytest.fixture(autouse=True)
def captured_logs() -> Generator[list[dict[str, Any]], None, None]:
    """Capture structlog events so they never reach CliRunner output.

    Yields:
        Captured event dicts, for tests that inspect log events.
    """
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture(autouse=True)
def clean_parameter_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove deployment parameters the developer's shell may have set.

    Also pins the Rich console width so messages are not wrapped.
    """
    for name in PARAMETER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COLUMNS", "200")


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Write `azd env get-values` output for the reference deployment.

    Returns:
        Path to the .env file.
    """
    path = tmp_path / ".env"
    path.write_text(
        'AZURE_ENV_NAME="wprod"\n'
        'AZURE_LOCATION="westeurope"\n'
        'SITE_NAME="wpsite"\n'
        'MYSQL_ADMIN_USER="mysqladmin"\n'
        f'MYSQL_ADMIN_PASSWORD="{VALID_PASSWORD}"\n'
    )
    return path


@pytest.fixture
def yaml_file(tmp_path: Path) -> Path:
    """Write a YAML parameter file for a dev deployment.

    Returns:
        Path to wpdeploy.yaml.
    """
    path = tmp_path / "wpdeploy.yaml"
    path.write_text(
        "environmentName: dev01\n"
        "siteName: blog\n"
        "mysqlAdminUser: blogadmin\n"
        f'mysqlAdminPassword: "{VALID_PASSWORD}"\n'
    )
    return path
