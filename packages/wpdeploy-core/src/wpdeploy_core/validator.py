"""Deployment parameter validator.

Single source of truth for the naming and credential rules that guard a
WordPress deployment. Every rule is checked before any cloud resource is
touched; each violated rule yields one Violation record.

Rule order:
    1. environment name presence
    2. environment name length (upper bound derived from the naming table)
    3. environment name charset
    4. derived resource name lengths
    5. admin username charset and length
    6. password presence, length and character classes
    7. resource group name (only when supplied)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence

import structlog

from wpdeploy_core.config import ValidatorConfig
from wpdeploy_core.models import (
    CharacterClass,
    DeploymentParameters,
    ValidationResult,
    Violation,
    ViolationKind,
)
from wpdeploy_core.naming import (
    RESOURCE_NAME_RULES,
    ResourceNameRule,
    max_environment_name_length,
    project_resource_names,
)

logger = structlog.get_logger(__name__)

ENVIRONMENT_NAME_FIELD = "environmentName"
ENVIRONMENT_NAME_MIN_LENGTH = 1
ENVIRONMENT_NAME_ALLOWED = "a-z0-9"
ENVIRONMENT_NAME_PATTERN = re.compile(r"[a-z0-9]+")

ADMIN_USER_FIELD = "databaseAdminUser"
ADMIN_USER_MIN_LENGTH = 1
ADMIN_USER_MAX_LENGTH = 16
ADMIN_USER_ALLOWED = "a-zA-Z0-9"
ADMIN_USER_PATTERN = re.compile(r"[a-zA-Z0-9]+")

PASSWORD_FIELD = "databaseAdminPassword"
PASSWORD_MIN_LENGTH = 8
PASSWORD_CLASS_PATTERNS: dict[CharacterClass, re.Pattern[str]] = {
    CharacterClass.UPPERCASE: re.compile(r"[A-Z]"),
    CharacterClass.LOWERCASE: re.compile(r"[a-z]"),
    CharacterClass.DIGIT: re.compile(r"[0-9]"),
    CharacterClass.SYMBOL: re.compile(r"[^a-zA-Z0-9]"),
}

RESOURCE_GROUP_FIELD = "resourceGroupName"
RESOURCE_GROUP_MIN_LENGTH = 1
RESOURCE_GROUP_MAX_LENGTH = 90
RESOURCE_GROUP_ALLOWED = "a-zA-Z0-9._-()"
RESOURCE_GROUP_PATTERN = re.compile(r"[a-zA-Z0-9._()-]+")

RuleCheck = Callable[[DeploymentParameters], Iterator[Violation]]


def _length_violation(field: str, actual: int, minimum: int, maximum: int | None) -> Violation:
    if maximum is None:
        message = f"{field} must be at least {minimum} characters (got {actual})"
    else:
        message = f"{field} must be between {minimum} and {maximum} characters (got {actual})"
    return Violation(
        kind=ViolationKind.LENGTH_OUT_OF_RANGE,
        field=field,
        message=message,
        actual_length=actual,
        min_length=minimum,
        max_length=maximum,
    )


def _charset_violation(field: str, allowed: str, detail: str) -> Violation:
    return Violation(
        kind=ViolationKind.INVALID_CHARSET,
        field=field,
        message=f"{field} may only contain [{allowed}]{detail}",
        allowed=allowed,
    )


def _invalid_characters(value: str, pattern: re.Pattern[str]) -> str:
    """List the distinct characters of value that the pattern rejects."""
    bad = sorted({ch for ch in value if not pattern.fullmatch(ch)})
    return " ".join(repr(ch) for ch in bad)


class ParameterValidator:
    """Validates deployment parameters against naming and credential rules.

    Attributes:
        config: Validator configuration
        rules: Resource naming table used for projections

    Example:
        >>> validator = ParameterValidator()
        >>> result = validator.validate(
        ...     DeploymentParameters(
        ...         environment_name="wprod",
        ...         database_admin_password="P@ssw0rd123!",
        ...     )
        ... )
        >>> result.passed
        True
    """

    def __init__(
        self,
        config: ValidatorConfig | None = None,
        rules: Sequence[ResourceNameRule] = RESOURCE_NAME_RULES,
    ) -> None:
        """Initialize the validator.

        Args:
            config: Validator configuration (defaults to collect-all)
            rules: Resource naming table

        Raises:
            NamingTableError: If the naming table is malformed.
        """
        self.config = config or ValidatorConfig()
        self.rules = tuple(rules)
        self.environment_name_max_length = max_environment_name_length(self.rules)
        self._log = logger.bind(component="parameter_validator")

    def validate(self, params: DeploymentParameters) -> ValidationResult:
        """Run every rule against the parameters.

        Args:
            params: Proposed deployment parameters

        Returns:
            ValidationResult with violations in rule order.
        """
        fail_fast = self.config.fail_fast
        self._log.info(
            "validation_started",
            environment_name=params.environment_name,
            site_name=params.site_name,
            fail_fast=fail_fast,
        )

        violations: list[Violation] = []
        for check in self._checks():
            for violation in check(params):
                violations.append(violation)
                self._log.debug(
                    "rule_failed",
                    rule=check.__name__.removeprefix("_check_"),
                    kind=violation.kind.value,
                    field=violation.field,
                )
                if fail_fast:
                    break
            if fail_fast and violations:
                self._log.warning("fail_fast_triggered", field=violations[0].field)
                break

        projections = []
        if params.environment_name:
            projections = project_resource_names(
                params.environment_name, params.site_name, self.rules
            )

        self._log.info(
            "validation_completed",
            passed=not violations,
            violation_count=len(violations),
        )

        return ValidationResult(
            parameters=params,
            violations=violations,
            projections=projections,
            fail_fast=fail_fast,
        )

    def _checks(self) -> list[RuleCheck]:
        checks: list[RuleCheck] = [
            self._check_environment_name,
            self._check_resource_names,
            self._check_admin_user,
            self._check_password,
        ]
        if self.config.check_resource_group:
            checks.append(self._check_resource_group)
        return checks

    def _check_environment_name(self, params: DeploymentParameters) -> Iterator[Violation]:
        name = params.environment_name
        if not name:
            yield Violation(
                kind=ViolationKind.MISSING_REQUIRED,
                field=ENVIRONMENT_NAME_FIELD,
                message=f"{ENVIRONMENT_NAME_FIELD} is not set (AZURE_ENV_NAME)",
            )
            return

        maximum = self.environment_name_max_length
        if not ENVIRONMENT_NAME_MIN_LENGTH <= len(name) <= maximum:
            yield _length_violation(
                ENVIRONMENT_NAME_FIELD, len(name), ENVIRONMENT_NAME_MIN_LENGTH, maximum
            )

        if not ENVIRONMENT_NAME_PATTERN.fullmatch(name):
            yield _charset_violation(
                ENVIRONMENT_NAME_FIELD,
                ENVIRONMENT_NAME_ALLOWED,
                f", found {_invalid_characters(name, ENVIRONMENT_NAME_PATTERN)}",
            )

    def _check_resource_names(self, params: DeploymentParameters) -> Iterator[Violation]:
        if not params.environment_name:
            return

        for projection in project_resource_names(
            params.environment_name, params.site_name, self.rules
        ):
            if projection.fits:
                continue
            yield Violation(
                kind=ViolationKind.RESOURCE_NAME_TOO_LONG,
                field=projection.resource,
                message=(
                    f"{projection.resource} name would be {projection.projected_length} "
                    f"characters, exceeding the {projection.max_length} character limit "
                    f"({projection.preview})"
                ),
                actual_length=projection.projected_length,
                max_length=projection.max_length,
            )

    def _check_admin_user(self, params: DeploymentParameters) -> Iterator[Violation]:
        user = params.database_admin_user
        if user and not ADMIN_USER_PATTERN.fullmatch(user):
            yield _charset_violation(
                ADMIN_USER_FIELD,
                ADMIN_USER_ALLOWED,
                " (no special characters or spaces)",
            )

        if not ADMIN_USER_MIN_LENGTH <= len(user) <= ADMIN_USER_MAX_LENGTH:
            yield _length_violation(
                ADMIN_USER_FIELD, len(user), ADMIN_USER_MIN_LENGTH, ADMIN_USER_MAX_LENGTH
            )

    def _check_password(self, params: DeploymentParameters) -> Iterator[Violation]:
        password = params.password
        if not password:
            yield Violation(
                kind=ViolationKind.MISSING_REQUIRED,
                field=PASSWORD_FIELD,
                message=f"{PASSWORD_FIELD} is not set (MYSQL_ADMIN_PASSWORD)",
            )
            return

        if len(password) < PASSWORD_MIN_LENGTH:
            yield _length_violation(PASSWORD_FIELD, len(password), PASSWORD_MIN_LENGTH, None)

        for character_class, pattern in PASSWORD_CLASS_PATTERNS.items():
            if pattern.search(password):
                continue
            yield Violation(
                kind=ViolationKind.MISSING_CHARACTER_CLASS,
                field=PASSWORD_FIELD,
                message=(
                    f"{PASSWORD_FIELD} must contain at least one "
                    f"{character_class.value} character"
                ),
                character_class=character_class,
            )

    def _check_resource_group(self, params: DeploymentParameters) -> Iterator[Violation]:
        name = params.resource_group_name
        if name is None:
            return

        if not RESOURCE_GROUP_MIN_LENGTH <= len(name) <= RESOURCE_GROUP_MAX_LENGTH:
            yield _length_violation(
                RESOURCE_GROUP_FIELD,
                len(name),
                RESOURCE_GROUP_MIN_LENGTH,
                RESOURCE_GROUP_MAX_LENGTH,
            )

        if name and not RESOURCE_GROUP_PATTERN.fullmatch(name):
            yield _charset_violation(
                RESOURCE_GROUP_FIELD,
                RESOURCE_GROUP_ALLOWED,
                f", found {_invalid_characters(name, RESOURCE_GROUP_PATTERN)}",
            )


def validate_parameters(
    params: DeploymentParameters,
    *,
    fail_fast: bool = False,
) -> ValidationResult:
    """Validate deployment parameters with the default naming table.

    Convenience function that creates a validator and runs it.

    Args:
        params: Proposed deployment parameters
        fail_fast: Stop at the first violation

    Returns:
        ValidationResult with all violations found

    Example:
        >>> result = validate_parameters(DeploymentParameters(environment_name="wordpress-prod"))
        >>> [v.kind.value for v in result.violations][:2]
        ['length_out_of_range', 'invalid_charset']
    """
    validator = ParameterValidator(ValidatorConfig(fail_fast=fail_fast))
    return validator.validate(params)
