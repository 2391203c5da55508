"""Resource naming table and name-length projector.

Every Azure resource provisioned for a WordPress deployment gets a name built
from a fixed template. The templates and the platform length limits live in
RESOURCE_NAME_RULES; nothing else in the package hardcodes a prefix, a suffix
length or a limit.

Template placeholders:
    {env}: the environment name
    {site}: the site name
    {suffix}: the platform-generated uniqueString() token, never generated
        here, only budgeted at UNIQUE_SUFFIX_LENGTH characters
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from string import Formatter

import structlog
from pydantic import BaseModel, ConfigDict, Field

from wpdeploy_core.errors import NamingTableError

logger = structlog.get_logger(__name__)

UNIQUE_SUFFIX_LENGTH = 13
"""Length reserved for the uniqueString() token appended to global names."""

ENV_PLACEHOLDER = "env"
SITE_PLACEHOLDER = "site"
SUFFIX_PLACEHOLDER = "suffix"
KNOWN_PLACEHOLDERS = frozenset({ENV_PLACEHOLDER, SITE_PLACEHOLDER, SUFFIX_PLACEHOLDER})


class ResourceNameRule(BaseModel):
    """Naming template and platform limit for one resource type.

    Attributes:
        key: Stable machine-readable identifier (e.g., "storage_account")
        resource: Human-readable resource name used in messages
        template: Name template with {env}, {site} and {suffix} placeholders
        max_length: Maximum name length enforced by the platform

    Example:
        >>> rule = ResourceNameRule(
        ...     key="network",
        ...     resource="network",
        ...     template="vnet-{env}",
        ...     max_length=64,
        ... )
        >>> rule.projected_length("wprod", "wpsite")
        10
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str = Field(..., min_length=1, description="Rule identifier")
    resource: str = Field(..., min_length=1, description="Display name")
    template: str = Field(..., min_length=1, description="Name template")
    max_length: int = Field(..., description="Platform name length limit")

    def placeholder_counts(self) -> Counter[str]:
        """Count placeholder occurrences in the template.

        Raises:
            NamingTableError: If the template uses an unknown or positional placeholder.
        """
        counts: Counter[str] = Counter()
        for _, field_name, _, _ in Formatter().parse(self.template):
            if field_name is None:
                continue
            if field_name not in KNOWN_PLACEHOLDERS:
                raise NamingTableError(self.key, f"unknown placeholder '{{{field_name}}}'")
            counts[field_name] += 1
        return counts

    @property
    def fixed_length(self) -> int:
        """Length of the literal characters in the template."""
        return sum(len(literal) for literal, _, _, _ in Formatter().parse(self.template))

    def projected_length(self, environment_name: str, site_name: str) -> int:
        """Compute the length the generated name would have."""
        counts = self.placeholder_counts()
        return (
            self.fixed_length
            + counts[ENV_PLACEHOLDER] * len(environment_name)
            + counts[SITE_PLACEHOLDER] * len(site_name)
            + counts[SUFFIX_PLACEHOLDER] * UNIQUE_SUFFIX_LENGTH
        )

    def preview(self, environment_name: str, site_name: str) -> str:
        """Render the name with a placeholder standing in for the suffix token.

        Example:
            >>> DATABASE_SERVER_RULE.preview("wprod", "wpsite")
            'mysql-wprod-<13-char-suffix>'
        """
        return self.template.format(
            env=environment_name,
            site=site_name,
            suffix=f"<{UNIQUE_SUFFIX_LENGTH}-char-suffix>",
        )


class ResourceProjection(BaseModel):
    """Projected name length of one resource for a given env/site pair.

    Attributes:
        key: Rule identifier
        resource: Human-readable resource name
        template: Name template the projection was computed from
        preview: Name with the suffix token shown as a placeholder
        projected_length: Length the generated name would have
        max_length: Platform limit for this resource
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    resource: str
    template: str
    preview: str
    projected_length: int = Field(..., ge=0)
    max_length: int = Field(..., gt=0)

    @property
    def fits(self) -> bool:
        """Check if the projected name stays within the platform limit."""
        return self.projected_length <= self.max_length

    @property
    def excess(self) -> int:
        """Number of characters over the limit (0 when it fits)."""
        return max(0, self.projected_length - self.max_length)


STORAGE_ACCOUNT_RULE = ResourceNameRule(
    key="storage_account",
    resource="storage account",
    template="st{env}{suffix}",
    max_length=24,
)
DATABASE_SERVER_RULE = ResourceNameRule(
    key="database_server",
    resource="database server",
    template="mysql-{env}-{suffix}",
    max_length=63,
)
CACHE_CLUSTER_RULE = ResourceNameRule(
    key="cache_cluster",
    resource="cache cluster",
    template="redis-{env}-{suffix}",
    max_length=63,
)
NETWORK_RULE = ResourceNameRule(
    key="network",
    resource="network",
    template="vnet-{env}",
    max_length=64,
)
COMPUTE_ENVIRONMENT_RULE = ResourceNameRule(
    key="compute_environment",
    resource="compute environment",
    template="cae-{env}",
    max_length=32,
)
COMPUTE_APP_RULE = ResourceNameRule(
    key="compute_app",
    resource="compute app",
    template="ca-{site}-{env}",
    max_length=32,
)

RESOURCE_NAME_RULES: tuple[ResourceNameRule, ...] = (
    STORAGE_ACCOUNT_RULE,
    DATABASE_SERVER_RULE,
    CACHE_CLUSTER_RULE,
    NETWORK_RULE,
    COMPUTE_ENVIRONMENT_RULE,
    COMPUTE_APP_RULE,
)


def check_naming_table(rules: Sequence[ResourceNameRule] = RESOURCE_NAME_RULES) -> None:
    """Verify that a naming table is well formed.

    Args:
        rules: Naming rules to check

    Raises:
        NamingTableError: On a duplicate key, a non-positive limit, an unknown
            placeholder, or a template without an {env} placeholder.
    """
    seen: set[str] = set()
    for rule in rules:
        if rule.key in seen:
            raise NamingTableError(rule.key, "duplicate resource key")
        seen.add(rule.key)

        if rule.max_length <= 0:
            raise NamingTableError(rule.key, f"max_length must be positive, got {rule.max_length}")

        if rule.placeholder_counts()[ENV_PLACEHOLDER] == 0:
            raise NamingTableError(rule.key, "template must contain {env}")


def max_environment_name_length(rules: Sequence[ResourceNameRule] = RESOURCE_NAME_RULES) -> int:
    """Derive the longest environment name every site-independent rule accepts.

    With the shipped table this is the storage account budget:
    24 - len("st") - 13 = 9.

    Args:
        rules: Naming rules to derive the bound from

    Returns:
        Maximum environment name length.

    Raises:
        NamingTableError: If the table is malformed or leaves no room for
            an environment name.
    """
    check_naming_table(rules)

    bounds: list[int] = []
    for rule in rules:
        counts = rule.placeholder_counts()
        if counts[SITE_PLACEHOLDER]:
            continue
        reserved = rule.fixed_length + counts[SUFFIX_PLACEHOLDER] * UNIQUE_SUFFIX_LENGTH
        budget = rule.max_length - reserved
        bounds.append(budget // counts[ENV_PLACEHOLDER])

    if not bounds:
        raise NamingTableError("*", "no site-independent rule to derive an environment name bound")

    bound = min(bounds)
    if bound < 1:
        raise NamingTableError("*", f"rules leave {bound} characters for the environment name")
    return bound


def project_resource_names(
    environment_name: str,
    site_name: str,
    rules: Sequence[ResourceNameRule] = RESOURCE_NAME_RULES,
) -> list[ResourceProjection]:
    """Project the name length of every resource for an env/site pair.

    Pure function: no password or username is needed, and calling it twice
    with the same input yields identical projections.

    Args:
        environment_name: Proposed environment name
        site_name: Proposed site name
        rules: Naming rules to project

    Returns:
        One ResourceProjection per rule, in table order.

    Example:
        >>> [p.projected_length for p in project_resource_names("wprod", "wpsite")]
        [20, 25, 25, 10, 9, 15]
    """
    check_naming_table(rules)

    projections = [
        ResourceProjection(
            key=rule.key,
            resource=rule.resource,
            template=rule.template,
            preview=rule.preview(environment_name, site_name),
            projected_length=rule.projected_length(environment_name, site_name),
            max_length=rule.max_length,
        )
        for rule in rules
    ]

    logger.debug(
        "resource_names_projected",
        environment_name=environment_name,
        site_name=site_name,
        lengths={p.key: p.projected_length for p in projections},
    )
    return projections


def explain_projections(projections: Sequence[ResourceProjection]) -> list[str]:
    """Render one human-readable line per projection.

    Example:
        >>> explain_projections(project_resource_names("wprod", "wpsite"))[0]
        'storage account: 20 chars (max 24) st<env><suffix> -> stwprod<13-char-suffix>'
    """
    lines: list[str] = []
    for projection in projections:
        marker = "" if projection.fits else f" EXCEEDS LIMIT BY {projection.excess}"
        lines.append(
            f"{projection.resource}: {projection.projected_length} chars "
            f"(max {projection.max_length}) {_display_template(projection.template)} "
            f"-> {projection.preview}{marker}"
        )
    return lines


def _display_template(template: str) -> str:
    return template.replace("{", "<").replace("}", ">")
