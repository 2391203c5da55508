"""Unit tests for parameter and result models.

Run with:
    pytest packages/wpdeploy-core/tests/unit/test_models.py -v
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wpdeploy_core.models import (
    DEFAULT_ADMIN_USER,
    DEFAULT_SITE_NAME,
    MASKED_SECRET,
    CheckResult,
    CheckStatus,
    DeploymentParameters,
    ValidationResult,
    Violation,
    ViolationKind,
)


class TestDeploymentParametersFromMapping:
    """Tests for DeploymentParameters.from_mapping."""

    @pytest.mark.requirement("parameter-sources")
    def test_env_var_keys(self, valid_values: dict[str, str]) -> None:
        """Environment variable names map onto fields."""
        params = DeploymentParameters.from_mapping(valid_values)

        assert params.environment_name == "wprod"
        assert params.site_name == "wpsite"
        assert params.database_admin_user == "mysqladmin"
        assert params.password == "P@ssw0rd123!"
        assert params.resource_group_name is None

    @pytest.mark.requirement("parameter-sources")
    def test_template_parameter_keys(self) -> None:
        """camelCase template parameter names are accepted too."""
        params = DeploymentParameters.from_mapping(
            {
                "environmentName": "dev",
                "siteName": "blog",
                "mysqlAdminUser": "dbowner",
                "allowedIpAddress": "203.0.113.7",
                "resourceGroupName": "rg-blog",
            }
        )

        assert params.environment_name == "dev"
        assert params.site_name == "blog"
        assert params.database_admin_user == "dbowner"
        assert params.allowed_ip_address == "203.0.113.7"
        assert params.resource_group_name == "rg-blog"

    @pytest.mark.requirement("parameter-sources")
    def test_defaults(self) -> None:
        """Missing optional keys fall back to defaults."""
        params = DeploymentParameters.from_mapping({"AZURE_ENV_NAME": "dev"})

        assert params.site_name == DEFAULT_SITE_NAME == "wpsite"
        assert params.database_admin_user == DEFAULT_ADMIN_USER == "mysqladmin"
        assert params.allowed_ip_address == ""
        assert params.password == ""

    def test_empty_values_use_defaults(self) -> None:
        """Empty strings behave like missing keys."""
        params = DeploymentParameters.from_mapping({"SITE_NAME": "", "MYSQL_ADMIN_USER": "  "})
        assert params.site_name == "wpsite"
        assert params.database_admin_user == "mysqladmin"

    def test_env_var_key_wins_over_template_key(self) -> None:
        """AZURE_ENV_NAME is looked up before environmentName."""
        params = DeploymentParameters.from_mapping(
            {"environmentName": "fromtemplate", "AZURE_ENV_NAME": "fromenv"}
        )
        assert params.environment_name == "fromenv"

    def test_quotes_are_stripped(self) -> None:
        """azd-style quoted values are unquoted."""
        params = DeploymentParameters.from_mapping({"AZURE_ENV_NAME": '"wprod"'})
        assert params.environment_name == "wprod"

    def test_unknown_keys_ignored(self) -> None:
        """Unrelated keys in the mapping are ignored."""
        params = DeploymentParameters.from_mapping({"AZURE_LOCATION": "westeurope"})
        assert params.environment_name == ""


class TestDeploymentParametersSecrets:
    """The password must not leak through the model."""

    @pytest.mark.requirement("secret-safety")
    def test_repr_hides_password(self, valid_params: DeploymentParameters) -> None:
        """repr/str never show the password."""
        assert "P@ssw0rd123!" not in repr(valid_params)
        assert "P@ssw0rd123!" not in str(valid_params)

    @pytest.mark.requirement("secret-safety")
    def test_safe_dict_masks_password(self, valid_params: DeploymentParameters) -> None:
        """to_safe_dict masks a set password."""
        data = valid_params.to_safe_dict()
        assert data["databaseAdminPassword"] == MASKED_SECRET
        assert data["environmentName"] == "wprod"

    def test_safe_dict_empty_password(self) -> None:
        """An unset password serialises as empty, not masked."""
        assert DeploymentParameters().to_safe_dict()["databaseAdminPassword"] == ""

    def test_frozen(self, valid_params: DeploymentParameters) -> None:
        """Parameters are immutable."""
        with pytest.raises(ValidationError):
            valid_params.environment_name = "other"  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            DeploymentParameters(location="westeurope")  # type: ignore[call-arg]


class TestViolation:
    """Tests for Violation model."""

    def test_kind_values(self) -> None:
        """All violation kinds are defined."""
        assert {k.value for k in ViolationKind} == {
            "missing_required",
            "length_out_of_range",
            "invalid_charset",
            "missing_character_class",
            "resource_name_too_long",
        }

    def test_message_required(self) -> None:
        """A violation needs a non-empty message."""
        with pytest.raises(ValidationError):
            Violation(kind=ViolationKind.MISSING_REQUIRED, field="environmentName", message="")


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_empty_result_passes(self, valid_params: DeploymentParameters) -> None:
        """No violations means passed."""
        result = ValidationResult(parameters=valid_params)
        assert result.passed is True
        assert result.failed is False
        assert result.kinds == []

    def test_violations_for(self, valid_params: DeploymentParameters) -> None:
        """violations_for filters by field."""
        missing = Violation(
            kind=ViolationKind.MISSING_REQUIRED,
            field="databaseAdminPassword",
            message="databaseAdminPassword is not set",
        )
        result = ValidationResult(parameters=valid_params, violations=[missing])

        assert result.failed is True
        assert result.violations_for("databaseAdminPassword") == [missing]
        assert result.violations_for("environmentName") == []


class TestCheckResult:
    """Tests for CheckResult."""

    @pytest.mark.parametrize(
        ("status", "passed"),
        [
            (CheckStatus.PASSED, True),
            (CheckStatus.WARNING, True),
            (CheckStatus.FAILED, False),
        ],
    )
    def test_passed_and_failed(self, status: CheckStatus, passed: bool) -> None:
        """WARNING counts as passed, FAILED as failed."""
        result = CheckResult(name="subscription", status=status)
        assert result.passed is passed
        assert result.failed is not passed

    def test_name_min_length(self) -> None:
        """Name must have at least 1 character."""
        with pytest.raises(ValidationError):
            CheckResult(name="", status=CheckStatus.PASSED)
