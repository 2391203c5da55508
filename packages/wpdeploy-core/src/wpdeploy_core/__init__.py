"""wpdeploy-core: Deployment parameter validation for WordPress on Azure Container Apps.

This package provides:
- DeploymentParameters: Proposed parameters for one deployment attempt
- ParameterValidator / validate_parameters: Naming and credential rules
- project_resource_names: Resource name length projection
- Parameter source helpers (environment, azd env dump, YAML file)
- check_subscription: Active vs. target Azure subscription check
"""

from __future__ import annotations

__version__ = "0.1.0"

from wpdeploy_core.config import ValidatorConfig
from wpdeploy_core.errors import ConfigurationError, NamingTableError, WpDeployError
from wpdeploy_core.models import (
    CharacterClass,
    CheckResult,
    CheckStatus,
    DeploymentParameters,
    ValidationResult,
    Violation,
    ViolationKind,
)
from wpdeploy_core.naming import (
    RESOURCE_NAME_RULES,
    UNIQUE_SUFFIX_LENGTH,
    ResourceNameRule,
    ResourceProjection,
    explain_projections,
    max_environment_name_length,
    project_resource_names,
)
from wpdeploy_core.sources import (
    load_env_file,
    load_yaml_values,
    merge_sources,
    parse_env_values,
    read_environment,
)
from wpdeploy_core.subscription import check_subscription
from wpdeploy_core.validator import ParameterValidator, validate_parameters

__all__ = [
    "__version__",
    # Configuration
    "ValidatorConfig",
    # Errors
    "ConfigurationError",
    "NamingTableError",
    "WpDeployError",
    # Models
    "CharacterClass",
    "CheckResult",
    "CheckStatus",
    "DeploymentParameters",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    # Naming
    "RESOURCE_NAME_RULES",
    "UNIQUE_SUFFIX_LENGTH",
    "ResourceNameRule",
    "ResourceProjection",
    "explain_projections",
    "max_environment_name_length",
    "project_resource_names",
    # Sources
    "load_env_file",
    "load_yaml_values",
    "merge_sources",
    "parse_env_values",
    "read_environment",
    # Checks
    "ParameterValidator",
    "check_subscription",
    "validate_parameters",
]
