"""Deployment parameter and validation result models.

Models for the proposed deployment parameters, the violations found in them,
and the aggregated validation result.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from wpdeploy_core.naming import ResourceProjection

DEFAULT_SITE_NAME = "wpsite"
DEFAULT_ADMIN_USER = "mysqladmin"
MASKED_SECRET = "********"

PARAMETER_KEYS: dict[str, tuple[str, ...]] = {
    "environment_name": ("AZURE_ENV_NAME", "environmentName"),
    "site_name": ("SITE_NAME", "siteName"),
    "database_admin_user": ("MYSQL_ADMIN_USER", "mysqlAdminUser", "databaseAdminUser"),
    "database_admin_password": (
        "MYSQL_ADMIN_PASSWORD",
        "mysqlAdminPassword",
        "databaseAdminPassword",
    ),
    "allowed_ip_address": ("ALLOWED_IP_ADDRESS", "allowedIpAddress"),
    "resource_group_name": ("RESOURCE_GROUP_NAME", "resourceGroupName"),
}
"""Accepted source keys per field: env var name first, then template parameter names."""


def _clean_value(value: str) -> str:
    """Strip whitespace and one pair of surrounding double quotes."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        value = value[1:-1]
    return value


class DeploymentParameters(BaseModel):
    """Proposed parameters for one deployment attempt.

    Field values are NOT constrained here: a malformed value must still be
    representable so the validator can report every problem with it.

    Attributes:
        environment_name: Identifier seeding every resource name
        site_name: Site identifier used in the compute app name
        database_admin_user: MySQL administrator login
        database_admin_password: MySQL administrator password (secret)
        allowed_ip_address: Optional client IP restriction, passed through unchecked
        resource_group_name: Resource group, validated only when supplied

    Example:
        >>> params = DeploymentParameters.from_mapping(
        ...     {"AZURE_ENV_NAME": "wprod", "MYSQL_ADMIN_PASSWORD": "P@ssw0rd123!"}
        ... )
        >>> params.site_name
        'wpsite'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    environment_name: str = Field(default="", description="Environment name")
    site_name: str = Field(default=DEFAULT_SITE_NAME, description="Site name")
    database_admin_user: str = Field(default=DEFAULT_ADMIN_USER, description="MySQL admin user")
    database_admin_password: SecretStr = Field(
        default=SecretStr(""), description="MySQL admin password"
    )
    allowed_ip_address: str = Field(default="", description="Allowed client IP address")
    resource_group_name: str | None = Field(default=None, description="Resource group name")

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> DeploymentParameters:
        """Build parameters from a flat key-value mapping.

        Keys may be environment variable names (AZURE_ENV_NAME) or template
        parameter names (environmentName). Missing or empty optional values
        fall back to their defaults.

        Args:
            values: Flat mapping of source keys to string values

        Returns:
            DeploymentParameters with defaults applied.
        """
        fields: dict[str, Any] = {}
        for field_name, keys in PARAMETER_KEYS.items():
            for key in keys:
                raw = values.get(key)
                if raw is None:
                    continue
                cleaned = _clean_value(str(raw))
                if cleaned:
                    fields[field_name] = cleaned
                    break

        if "database_admin_password" in fields:
            fields["database_admin_password"] = SecretStr(fields["database_admin_password"])
        return cls(**fields)

    @property
    def password(self) -> str:
        """Return the raw password. Never log or render this value."""
        return self.database_admin_password.get_secret_value()

    def to_safe_dict(self) -> dict[str, Any]:
        """Serialise parameters with the password masked."""
        return {
            "environmentName": self.environment_name,
            "siteName": self.site_name,
            "databaseAdminUser": self.database_admin_user,
            "databaseAdminPassword": MASKED_SECRET if self.password else "",
            "allowedIpAddress": self.allowed_ip_address,
            "resourceGroupName": self.resource_group_name,
        }


class ViolationKind(str, Enum):
    """Kind of validation rule violation.

    Attributes:
        MISSING_REQUIRED: Required value is empty
        LENGTH_OUT_OF_RANGE: Value length outside the allowed range
        INVALID_CHARSET: Value contains disallowed characters
        MISSING_CHARACTER_CLASS: Password lacks a required character class
        RESOURCE_NAME_TOO_LONG: A derived resource name exceeds its limit
    """

    MISSING_REQUIRED = "missing_required"
    LENGTH_OUT_OF_RANGE = "length_out_of_range"
    INVALID_CHARSET = "invalid_charset"
    MISSING_CHARACTER_CLASS = "missing_character_class"
    RESOURCE_NAME_TOO_LONG = "resource_name_too_long"


class CharacterClass(str, Enum):
    """Character classes a password must contain."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGIT = "digit"
    SYMBOL = "symbol"


class Violation(BaseModel):
    """A single failed validation rule.

    Carries what is needed to render a message without the offending value:
    lengths, bounds, the allowed charset or the missing class.

    Attributes:
        kind: Machine-readable violation kind
        field: Parameter field (camelCase) or resource display name
        message: Human-readable message, never containing a secret
        actual_length: Length of the offending value or projected name
        min_length: Lower bound, if any
        max_length: Upper bound, if any
        allowed: Allowed character set description, for charset violations
        character_class: Missing class, for password violations

    Example:
        >>> v = Violation(
        ...     kind=ViolationKind.LENGTH_OUT_OF_RANGE,
        ...     field="environmentName",
        ...     message="environmentName must be 1-9 characters (got 14)",
        ...     actual_length=14,
        ...     min_length=1,
        ...     max_length=9,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ViolationKind = Field(..., description="Violation kind")
    field: str = Field(..., min_length=1, description="Field or resource")
    message: str = Field(..., min_length=1, description="Human-readable message")
    actual_length: int | None = Field(default=None, ge=0, description="Actual length")
    min_length: int | None = Field(default=None, ge=0, description="Lower bound")
    max_length: int | None = Field(default=None, ge=0, description="Upper bound")
    allowed: str | None = Field(default=None, description="Allowed characters")
    character_class: CharacterClass | None = Field(default=None, description="Missing class")


class ValidationResult(BaseModel):
    """Outcome of validating one set of deployment parameters.

    Attributes:
        parameters: The parameters that were validated
        violations: Violations in rule order (empty when valid)
        projections: Projected resource names (empty when no environment name)
        fail_fast: Whether validation stopped at the first violation
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    parameters: DeploymentParameters
    violations: list[Violation] = Field(default_factory=list)
    projections: list[ResourceProjection] = Field(default_factory=list)
    fail_fast: bool = False

    @property
    def passed(self) -> bool:
        """Check if the parameters are safe to hand to the provisioning engine."""
        return not self.violations

    @property
    def failed(self) -> bool:
        """Check if any rule was violated."""
        return bool(self.violations)

    @property
    def kinds(self) -> list[ViolationKind]:
        """Violation kinds in report order."""
        return [v.kind for v in self.violations]

    def violations_for(self, field: str) -> list[Violation]:
        """Return the violations reported against one field or resource."""
        return [v for v in self.violations if v.field == field]


class CheckStatus(str, Enum):
    """Status of an environment check.

    Attributes:
        PASSED: Check passed
        FAILED: Check failed
        WARNING: Check passed with warnings
    """

    PASSED = "passed"
    FAILED = "failed"
    WARNING = "warning"


class CheckResult(BaseModel):
    """Result of a single environment check (e.g., subscription match).

    Attributes:
        name: Check name
        status: Check status
        message: Human-readable result message
        remedy: Suggested command or action when the check failed
        details: Additional details
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Check name")
    status: CheckStatus = Field(..., description="Check status")
    message: str = Field(default="", description="Result message")
    remedy: str = Field(default="", description="Suggested remedy")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional details")

    @property
    def passed(self) -> bool:
        """Check if result indicates success."""
        return self.status in (CheckStatus.PASSED, CheckStatus.WARNING)

    @property
    def failed(self) -> bool:
        """Check if result indicates failure."""
        return self.status == CheckStatus.FAILED
